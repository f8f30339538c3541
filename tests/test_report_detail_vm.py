"""Tests for the report detail view-model."""

from datetime import date
import threading

from app.viewmodels.report_detail_vm import DetailState, ReportDetailVM
from core.messages import DEFAULT_MESSAGES


class _Navigation:
    def __init__(self):
        self.calls = 0

    def __call__(self):
        self.calls += 1


def _detail_client(make_client, **record):
    return make_client(records=[{"record_no": 5, **record}])


class TestLoadOne:
    def test_loads_full_record(self, make_client):
        client = _detail_client(
            make_client,
            r_title="Playground",
            date="2024-04-01T09:00:00Z",
            video_url="https://cdn.example.com/v/clip.MP4",
            r_content="Calm all day.",
            highlights=[{"start": 1, "end": 4.5, "label": "Laughed"}, {"label": "Waved"}],
            behavior_stats={"smile": 3},
        )
        vm = ReportDetailVM(client)
        snap = vm.load_one(5)

        assert snap.state is DetailState.READY
        assert snap.report.id == 5
        assert snap.report.title == "Playground"
        assert snap.report.date == date(2024, 4, 1)
        assert snap.is_video_media
        assert snap.detail.display_date == "2024-04-01"
        assert snap.detail.summary_text == "Calm all day."
        assert snap.detail.highlight_lines == ["[1s ~ 4.5s] Laughed", "Waved"]
        assert snap.report.behavior_stats == {"smile": 3}

    def test_all_optional_fields_missing(self, make_client):
        client = make_client(records=[{"report_no": 8}])
        snap = ReportDetailVM(client).load_one(8)

        assert snap.state is DetailState.READY
        assert snap.report.title == "Untitled"
        assert snap.detail.display_date == "-"
        assert snap.detail.summary_text == DEFAULT_MESSAGES["no_summary"]
        assert snap.detail.highlight_lines == []
        assert not snap.detail.has_media
        assert not snap.is_video_media

    def test_route_id_used_when_record_has_none(self, make_client):
        client = make_client()
        client.fetch_one = lambda report_id: {"r_title": "Anonymous"}
        snap = ReportDetailVM(client).load_one("17")

        assert snap.state is DetailState.READY
        assert snap.report.id == "17"

    def test_image_media_is_not_video(self, make_client):
        client = _detail_client(make_client, thumbnail_url="https://cdn.example.com/scene.jpg")
        snap = ReportDetailVM(client).load_one(5)

        assert snap.detail.has_media
        assert not snap.is_video_media

    def test_not_found_goes_to_error(self, make_client):
        snap = ReportDetailVM(make_client(0)).load_one(404)

        assert snap.state is DetailState.ERROR
        assert snap.error_message == DEFAULT_MESSAGES["detail_failed"]
        assert snap.report is None

    def test_transport_failure_goes_to_error(self, make_client):
        client = _detail_client(make_client)
        client.fail_fetch = True
        snap = ReportDetailVM(client).load_one(5)

        assert snap.state is DetailState.ERROR


class TestDeleteOne:
    def test_success_navigates_back(self, make_client):
        client = _detail_client(make_client)
        nav = _Navigation()
        vm = ReportDetailVM(client, on_navigate_back=nav)
        vm.load_one(5)

        assert vm.delete_one() is True
        assert client.delete_calls == [5]
        assert nav.calls == 1

    def test_failure_keeps_record_displayed(self, make_client):
        client = _detail_client(make_client)
        client.raise_ids = {5}
        nav = _Navigation()
        vm = ReportDetailVM(client, on_navigate_back=nav)
        vm.load_one(5)

        assert vm.delete_one() is False
        snap = vm.snapshot()
        assert snap.state is DetailState.READY
        assert snap.report.id == 5
        assert snap.notice == DEFAULT_MESSAGES["delete_failed"]
        assert nav.calls == 0

    def test_rejected_delete_is_a_failure(self, make_client):
        client = _detail_client(make_client)
        client.reject_ids = {5}
        vm = ReportDetailVM(client)
        vm.load_one(5)

        assert vm.delete_one() is False

    def test_delete_ignored_before_load(self, make_client):
        client = _detail_client(make_client)
        vm = ReportDetailVM(client)

        assert vm.delete_one() is False
        assert client.delete_calls == []


class TestSupersededLoad:
    """A late response for a previously opened report must not commit."""

    def _blocking_client(self, make_client):
        client = make_client(
            records=[
                {"id": 1, "title": "First", "date": "2024-01-01"},
                {"id": 2, "title": "Second", "date": "2024-01-02"},
            ]
        )
        original_fetch = client.fetch_one
        entered = threading.Event()
        release = threading.Event()

        def fetch_one(report_id):
            if report_id == 1:
                entered.set()
                assert release.wait(timeout=5)
            return original_fetch(report_id)

        client.fetch_one = fetch_one
        return client, entered, release

    def test_slow_earlier_load_is_discarded(self, make_client):
        client, entered, release = self._blocking_client(make_client)
        vm = ReportDetailVM(client)
        worker = threading.Thread(target=vm.load_one, args=(1,))
        worker.start()
        assert entered.wait(timeout=5)

        vm.load_one(2)
        release.set()
        worker.join(timeout=5)

        snap = vm.snapshot()
        assert snap.state is DetailState.READY
        assert snap.report.id == 2

        assert vm.delete_one() is True
        assert client.delete_calls == [2]

    def test_slow_earlier_failure_is_discarded(self, make_client):
        client, entered, release = self._blocking_client(make_client)
        client.records = [r for r in client.records if r["id"] != 1]
        vm = ReportDetailVM(client)
        worker = threading.Thread(target=vm.load_one, args=(1,))
        worker.start()
        assert entered.wait(timeout=5)

        vm.load_one(2)
        release.set()
        worker.join(timeout=5)

        snap = vm.snapshot()
        assert snap.state is DetailState.READY
        assert snap.error_message == ""
        assert snap.report.id == 2
