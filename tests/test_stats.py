from fsrs_lite import (
    Card,
    Parameters,
    Rating,
    Scheduler,
    State,
    create_card,
    get_average_retention,
    get_card_stats,
    get_due_count,
    schedule,
)

from datetime import datetime, timedelta, timezone

import pytest

T0 = datetime(2022, 11, 29, 12, 30, 0, 0, timezone.utc)


class TestStats:
    def test_get_due_count(self):
        cards = [
            create_card(now=T0 - timedelta(days=1)),
            create_card(now=T0),
            create_card(now=T0 + timedelta(days=1)),
            schedule(create_card(now=T0), Rating.Again, T0).card,
        ]

        assert get_due_count(cards, now=T0) == 2
        assert get_due_count(cards, now=T0 + timedelta(minutes=1)) == 3
        assert get_due_count(cards, now=T0 + timedelta(days=2)) == 4
        assert get_due_count([], now=T0) == 0

        # generators are accepted
        assert get_due_count((card for card in cards), now=T0) == 2

    def test_get_due_count_invalid_datetime(self):
        naive = datetime(2022, 11, 29, 12, 30)

        with pytest.raises(ValueError):
            get_due_count([create_card(now=T0), Card(due=naive)], now=T0)

        with pytest.raises(ValueError):
            get_due_count([create_card(now=T0)], now=naive)

    def test_get_card_stats(self):
        new_card = create_card(now=T0)
        cards = [
            new_card,
            schedule(new_card, Rating.Hard, T0).card,
            schedule(new_card, Rating.Good, T0).card,
            Card(state=State.Relearning, due=T0, stability=1.0, difficulty=5.0),
            Card(state=State.Review, due=T0, stability=1.0, difficulty=5.0),
        ]

        assert get_card_stats(cards) == {
            "new": 1,
            "learning": 2,
            "review": 2,
            "total": 5,
        }
        assert get_card_stats([]) == {"new": 0, "learning": 0, "review": 0, "total": 0}

    def test_get_average_retention(self):
        cards = [
            Card(state=State.Review, due=T0, stability=9.0, difficulty=5.0),
            Card(
                state=State.Review,
                due=T0 + timedelta(days=9),
                stability=10.0,
                difficulty=5.0,
            ),
            # only Review cards count
            Card(state=State.Learning, due=T0, stability=0.4, difficulty=7.0),
            create_card(now=T0),
        ]

        # 0.9 for the first card, 1.0 for the card that is not yet due
        assert get_average_retention(cards, now=T0 + timedelta(days=9)) == 95
        assert get_average_retention(cards, now=T0) == 100

        assert get_average_retention([], now=T0) == 0
        assert get_average_retention([create_card(now=T0)], now=T0) == 0

    def test_get_average_retention_custom_scheduler(self):
        scheduler = Scheduler(parameters=Parameters(request_retention=0.8))
        cards = [Card(state=State.Review, due=T0, stability=90.0, difficulty=5.0)]

        # the forgetting curve does not depend on the parameters
        assert get_average_retention(
            cards, now=T0 + timedelta(days=90), scheduler=scheduler
        ) == get_average_retention(cards, now=T0 + timedelta(days=90))
        assert get_average_retention(cards, now=T0 + timedelta(days=90)) == 90
