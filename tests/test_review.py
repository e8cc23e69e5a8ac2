# SPDX-License-Identifier: MIT

import unittest

import pendulum

from tests.support import FakeClock, make_entry
from zenbullet.service.entry import EntryStore
from zenbullet.service.review import create_weekly_review, review_title, weekly_reviews


class TestWeeklyReview(unittest.TestCase):
    def setUp(self) -> None:
        self.store = EntryStore(clock=FakeClock())

    def test_review_is_dated_on_week_start(self) -> None:
        review = create_weekly_review(self.store, pendulum.date(2024, 3, 6))
        self.assertEqual(review["type"], "weekly-review")
        self.assertEqual(review["date"], pendulum.date(2024, 3, 3))

        monday_review = create_weekly_review(
            self.store, pendulum.date(2024, 3, 6), starts_monday=True
        )
        self.assertEqual(monday_review["date"], pendulum.date(2024, 3, 4))

    def test_creating_twice_returns_existing(self) -> None:
        first = create_weekly_review(self.store, pendulum.date(2024, 3, 6))
        second = create_weekly_review(self.store, pendulum.date(2024, 3, 8))
        self.assertEqual(first["id"], second["id"])
        self.assertEqual(len(self.store), 1)

    def test_reviews_listed_newest_first(self) -> None:
        entries = [
            make_entry(id="old", type="weekly-review", date=pendulum.date(2024, 1, 7)),
            make_entry(id="task", date=pendulum.date(2024, 2, 1)),
            make_entry(id="new", type="weekly-review", date=pendulum.date(2024, 2, 4)),
        ]
        self.assertEqual([e["id"] for e in weekly_reviews(entries)], ["new", "old"])

    def test_review_title(self) -> None:
        review = make_entry(type="weekly-review", date=pendulum.date(2024, 2, 4))
        self.assertEqual(review_title(review), "Week of 2024-02-04")
        review["custom_title"] = "Sprint retro"
        self.assertEqual(review_title(review), "Sprint retro")

    def test_reviews_are_not_in_inbox(self) -> None:
        create_weekly_review(self.store, pendulum.date(2024, 3, 6))
        self.assertEqual(self.store.inbox(), [])
