"""
Locust Load Test Suite

Run scenarios:
  locust -f locustfile.py --tags concurrency  # Many kiosks, one show, same seats
  locust -f locustfile.py --tags throughput   # Cached catalog reads
  locust -f locustfile.py --tags edge         # Bad input
  locust -f locustfile.py                     # All tests
"""

import random
from locust import HttpUser, task, between, tag, events

# Shared state
SHOW_IDS = []
CONTESTED_SHOW = None


@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    print("\n" + "=" * 60)
    print("SETUP: Using the first seeded show as the contested show")
    print("=" * 60)


def _load_shows(client):
    resp = client.get("/api/v1/shows/", name="/api/v1/shows/")
    if resp.status_code != 200:
        return
    for show in resp.json():
        if show["id"] not in SHOW_IDS:
            SHOW_IDS.append(show["id"])
    if CONTESTED_SHOW is None and resp.json():
        globals()["CONTESTED_SHOW"] = resp.json()[0]


class ConcurrencyUser(HttpUser):
    """
    TEST 1: Concurrency - every user fights over the front row

    Run: locust -f locustfile.py --tags concurrency -u 100 -r 50 --run-time 30s

    After test, verify no seat was sold twice:
      SELECT show_id, row_idx, col_idx, COUNT(*) FROM reservations
      GROUP BY 1, 2, 3 HAVING COUNT(*) > 1;
    Should return no rows.
    """
    wait_time = between(0, 0.1)

    def on_start(self):
        _load_shows(self.client)
        resp = self.client.post("/api/v1/tickets/", name="/api/v1/tickets/")
        self.holder_id = resp.json()["holder_id"] if resp.status_code == 201 else None

    @tag("concurrency")
    @task
    def book_front_row(self):
        if not CONTESTED_SHOW or self.holder_id is None:
            return

        cols = CONTESTED_SHOW["cols"]
        start = random.randrange(cols)
        seats = [{"row": 0, "col": col} for col in range(start, min(start + 2, cols))]

        with self.client.post(
            f"/api/v1/shows/{CONTESTED_SHOW['id']}/bookings",
            json={"holder_id": self.holder_id, "seats": seats},
            name="/api/v1/shows/{id}/bookings",
            catch_response=True,
        ) as resp:
            if resp.status_code in (201, 409):
                resp.success()  # 409: seat already taken
            else:
                resp.failure(f"Unexpected: {resp.status_code}")


class ThroughputUser(HttpUser):
    """
    TEST 2: Throughput - Cache effectiveness

    Run twice:
      1. With Redis: locust -f locustfile.py --tags throughput -u 100 -r 20 --run-time 60s
      2. Without Redis: REDIS_ENABLED=false, run again
    """
    wait_time = between(0.1, 0.5)

    @tag("throughput", "read")
    @task(10)
    def list_shows_cached(self):
        _load_shows(self.client)

    @tag("throughput", "read")
    @task(3)
    def seat_map(self):
        if SHOW_IDS:
            self.client.get(
                f"/api/v1/shows/{random.choice(SHOW_IDS)}/seats",
                name="/api/v1/shows/{id}/seats",
            )

    @tag("throughput")
    @task(1)
    def health_check(self):
        self.client.get("/health")


class EdgeCaseUser(HttpUser):
    """
    TEST 3: Edge cases - Bad input handling

    Run: locust -f locustfile.py --tags edge -u 20 -r 5 --run-time 30s
    """
    wait_time = between(0.5, 1.5)

    def on_start(self):
        resp = self.client.post("/api/v1/tickets/", name="/api/v1/tickets/")
        self.holder_id = resp.json()["holder_id"] if resp.status_code == 201 else 0

    def _expect(self, show_id, body, allowed):
        with self.client.post(
            f"/api/v1/shows/{show_id}/bookings",
            json=body,
            name="/api/v1/shows/{id}/bookings [edge]",
            catch_response=True,
        ) as resp:
            if resp.status_code in allowed:
                resp.success()
            else:
                resp.failure(f"Expected {allowed}, got {resp.status_code}")

    @tag("edge")
    @task
    def unknown_show(self):
        self._expect(999999, {"holder_id": self.holder_id, "seats": [{"row": 0, "col": 0}]}, (404,))

    @tag("edge")
    @task
    def empty_selection(self):
        self._expect(1, {"holder_id": self.holder_id, "seats": []}, (422,))

    @tag("edge")
    @task
    def seat_outside_grid(self):
        self._expect(1, {"holder_id": self.holder_id, "seats": [{"row": 99, "col": 99}]}, (422,))

    @tag("edge")
    @task
    def negative_coordinate(self):
        self._expect(1, {"holder_id": self.holder_id, "seats": [{"row": -1, "col": 0}]}, (422,))
