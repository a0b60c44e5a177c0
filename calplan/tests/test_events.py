import unittest
from fastapi.testclient import TestClient
from calplan.api.api_run import app
from calplan.events import web_observers
from calplan.events.Event_Bus import EventBus, PLAN_NOTICE
from calplan.events.event_helpers import publish_notice, publish_save_status


class TestEventBus(unittest.TestCase):

    def test_failing_subscriber_does_not_block_others(self):
        bus = EventBus()
        received = []

        def broken(_name, _payload):
            raise RuntimeError("boom")

        bus.subscribe(PLAN_NOTICE, broken)
        bus.subscribe(PLAN_NOTICE, lambda _n, p: received.append(p))
        with self.assertLogs("calplan.events.Event_Bus", level="ERROR"):
            publish_notice("hello", bus=bus)
        self.assertEqual(received, [{'level': 'info', 'message': 'hello'}])

    def test_subscribe_is_idempotent(self):
        bus = EventBus()
        received = []
        listener = lambda _n, p: received.append(p)  # noqa: E731
        bus.subscribe(PLAN_NOTICE, listener)
        bus.subscribe(PLAN_NOTICE, listener)
        publish_notice("once", bus=bus)
        self.assertEqual(len(received), 1)
        bus.unsubscribe(PLAN_NOTICE, listener)
        bus.unsubscribe(PLAN_NOTICE, listener)


class TestNotificationsEndpoint(unittest.TestCase):

    def test_polling_with_cursor(self):
        web_observers.start()
        client = TestClient(app)
        cursor = client.get('/api/notifications').json()['next_cursor']
        publish_save_status("saving")
        publish_notice("Saving failed.", level="error")
        data = client.get('/api/notifications', params={'since': cursor}).json()
        self.assertEqual([e.get('status') or e.get('message') for e in data['events']], ["saving", "Saving failed."])
        self.assertEqual(data['next_cursor'], cursor + 2)
        again = client.get('/api/notifications', params={'since': data['next_cursor']}).json()
        self.assertEqual(again['events'], [])


if __name__ == '__main__':
    unittest.main()
