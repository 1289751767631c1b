from core.state import AppState, Notify


def test_notifications_queue_until_taken():
    state = AppState()
    seen = []
    state.notification.connect(seen.append)

    state.notify("early", "warn")
    assert seen == []

    assert state.take_queued() == [Notify("early", "warn")]
    assert state.queued_notifications == []

    state.notify("later")
    assert seen == [Notify("later", "info")]


def test_track_errors_become_error_notifications(coordinator, store, missing_paths):
    state = AppState()
    state.bind_coordinator(coordinator)
    state.take_queued()
    seen = []
    state.notification.connect(seen.append)

    store.append("/music/gone.mp3")
    missing_paths.add("/music/gone.mp3")
    coordinator.select_and_play(0)

    assert len(seen) == 1
    assert seen[0].notify_type == "error"
    assert "gone.mp3" in seen[0].message
