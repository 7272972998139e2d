import threading

from construapp.infrastructure.dispatcher import EventDispatcher


class TestEventDispatcher:

    def test_runs_callbacks_in_post_order(self):
        dispatcher = EventDispatcher()
        seen = []
        dispatcher.post(seen.append, "a")
        dispatcher.post(seen.append, "b")

        assert dispatcher.run_pending() == 2
        assert seen == ["a", "b"]
        assert not dispatcher.has_pending

    def test_nothing_runs_until_drained(self):
        dispatcher = EventDispatcher()
        seen = []
        dispatcher.post(seen.append, 1)
        assert seen == []
        assert dispatcher.has_pending

    def test_events_posted_while_draining_wait_for_next_call(self):
        dispatcher = EventDispatcher()
        seen = []

        def first():
            seen.append("first")
            dispatcher.post(seen.append, "second")

        dispatcher.post(first)
        assert dispatcher.run_pending() == 1
        assert seen == ["first"]

        assert dispatcher.run_pending() == 1
        assert seen == ["first", "second"]

    def test_posts_from_other_threads_run_on_caller(self):
        dispatcher = EventDispatcher()
        threads = []
        worker = threading.Thread(
            target=lambda: dispatcher.post(lambda: threads.append(threading.current_thread()))
        )
        worker.start()
        worker.join()

        dispatcher.run_pending()
        assert threads == [threading.current_thread()]
