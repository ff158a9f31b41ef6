from frontiercrawl.domain.status import RequestStatus, StatusTracker, WorkflowStatus


def test_default_status_is_none():
    tracker = StatusTracker()
    assert tracker.get() == RequestStatus("", WorkflowStatus.NONE)


def test_set_replaces_message_and_code():
    tracker = StatusTracker("loaded(args)", WorkflowStatus.INITIATED)
    tracker.set("fetching", WorkflowStatus.RUNNING)
    assert tracker.message == "fetching"
    assert tracker.code == WorkflowStatus.RUNNING


def test_codes_are_not_interpreted():
    # codes owned by an outside workflow are stored as given
    tracker = StatusTracker()
    tracker.set("custom", 42)
    assert tracker.get() == RequestStatus("custom", 42)
