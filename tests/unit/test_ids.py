from movieshelf.core.ids import MovieIdGenerator
from movieshelf.core.time import millis_to_iso


def test_movie_ids_strictly_increase_when_clock_stalls(monkeypatch) -> None:
    monkeypatch.setattr("movieshelf.core.ids.now_millis", lambda: 1000)
    generator = MovieIdGenerator()
    assert [generator.next_timestamp() for _ in range(3)] == [1000, 1001, 1002]


def test_movie_ids_follow_clock_when_it_advances(monkeypatch) -> None:
    ticks = iter([5000, 7000])
    monkeypatch.setattr("movieshelf.core.ids.now_millis", lambda: next(ticks))
    generator = MovieIdGenerator()
    assert generator.next_timestamp() == 5000
    assert generator.next_timestamp() == 7000


def test_millis_to_iso_matches_javascript_format() -> None:
    assert millis_to_iso(1700000000123) == "2023-11-14T22:13:20.123Z"
    assert millis_to_iso(0) == "1970-01-01T00:00:00.000Z"
