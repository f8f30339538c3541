"""Video player widget with basic controls."""

from __future__ import annotations

from PySide6.QtCore import QUrl
from PySide6.QtMultimedia import QAudioOutput, QMediaPlayer
from PySide6.QtMultimediaWidgets import QVideoWidget
from PySide6.QtWidgets import QHBoxLayout, QPushButton, QSizePolicy, QVBoxLayout, QWidget
from loguru import logger

from app.views.constants import MEDIA_MIN_HEIGHT


def _to_qurl(url: str) -> QUrl:
    if "://" in url:
        return QUrl(url)
    return QUrl.fromLocalFile(url)


class VideoPlayerWidget(QWidget):
    """Plays a report video from a URL with a play/pause toggle."""

    def __init__(self, url: str, parent: QWidget | None = None) -> None:
        super().__init__(parent)

        self._media_player = QMediaPlayer(self)
        self._audio_output = QAudioOutput(self)
        self._media_player.setAudioOutput(self._audio_output)
        self._video_widget = QVideoWidget(self)
        self._media_player.setVideoOutput(self._video_widget)
        self._media_player.errorOccurred.connect(self._on_error)
        self._media_player.setSource(_to_qurl(url))

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        self._video_widget.setMinimumHeight(MEDIA_MIN_HEIGHT)
        self._video_widget.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        layout.addWidget(self._video_widget)

        controls = QHBoxLayout()
        self._play_button = QPushButton("Play")
        self._play_button.clicked.connect(self.toggle_playback)
        controls.addWidget(self._play_button)
        controls.addStretch(1)
        layout.addLayout(controls)

    def toggle_playback(self) -> None:
        if self._media_player.playbackState() == QMediaPlayer.PlaybackState.PlayingState:
            self._media_player.pause()
            self._play_button.setText("Play")
        else:
            self._media_player.play()
            self._play_button.setText("Pause")

    def stop(self) -> None:
        self._media_player.stop()

    def _on_error(self, error, message: str) -> None:
        logger.error("Video playback error {}: {}", error, message)
