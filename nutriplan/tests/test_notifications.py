import unittest

from nutriplan.events import web_observers
from nutriplan.events.Event_Bus import EventBus
from nutriplan.events.event_helpers import (
    publish_image_failed, publish_meal_regenerated, publish_meal_saved,
)


class TestEventBus(unittest.TestCase):
    def test_broken_listener_does_not_stop_delivery(self):
        bus = EventBus()
        received = []

        def broken(name, payload):
            raise ValueError("listener bug")

        bus.subscribe("meal.saved", broken)
        bus.subscribe("meal.saved", lambda name, payload: received.append(payload))
        bus.publish("meal.saved", {"name": "Soup"})
        self.assertEqual(received, [{"name": "Soup"}])


class TestWebObservers(unittest.TestCase):
    def setUp(self):
        web_observers.start()
        web_observers.start()
        web_observers.clear()

    def test_cursor_polling(self):
        publish_meal_saved(0, "Lunch", "Soup")
        first = web_observers.get_events()
        self.assertEqual(len(first["events"]), 1)
        publish_image_failed(1, "Dinner", "Stew")
        newer = web_observers.get_events(since=first["next_cursor"])
        self.assertEqual([e["type"] for e in newer["events"]], ["image.failed"])
        self.assertEqual(newer["events"][0]["level"], "error")
        self.assertIn("Stew", newer["events"][0]["message"])
        self.assertEqual(web_observers.get_events(since=newer["next_cursor"])["events"], [])

    def test_regeneration_source_is_reported(self):
        publish_meal_regenerated(0, "Lunch", "Lentil stew", "fallback")
        event = web_observers.get_events()["events"][-1]
        self.assertEqual(event["source"], "fallback")
        self.assertEqual(event["level"], "info")

    def test_buffer_is_bounded(self):
        for i in range(web_observers.MAX_EVENTS + 20):
            publish_meal_saved(0, "Lunch", f"Meal {i}")
        events = web_observers.get_events()["events"]
        self.assertEqual(len(events), web_observers.MAX_EVENTS)
        self.assertEqual(events[-1]["name"], f"Meal {web_observers.MAX_EVENTS + 19}")


if __name__ == "__main__":
    unittest.main()
