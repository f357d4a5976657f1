import pytest

from titrasim.errors import InvalidArgument
from titrasim.scheduler import TitrationDriver
from titrasim.session import SessionStatus, TitrationSession


def test_delta_is_increment_times_speed():
    driver = TitrationDriver(TitrationSession(), speed=10, increment_ml=0.1)
    assert driver.delta_ml == pytest.approx(1.0)
    driver.set_speed(2)
    assert driver.delta_ml == pytest.approx(0.2)


@pytest.mark.parametrize("speed", [0, -1, float("nan")])
def test_invalid_speed_rejected(speed):
    with pytest.raises(InvalidArgument):
        TitrationDriver(TitrationSession(), speed=speed)
    driver = TitrationDriver(TitrationSession())
    with pytest.raises(InvalidArgument):
        driver.set_speed(speed)


def test_run_to_completion():
    session = TitrationSession()
    committed = TitrationDriver(session, speed=10).run()

    assert committed == 50
    assert session.status is SessionStatus.FINISHED
    assert session.current_base_volume_ml == 50.0
    assert len(session.samples) == 51
    assert session.equivalence_point is not None


def test_run_sleeps_between_ticks():
    calls = []
    session = TitrationSession()
    TitrationDriver(session, speed=100).run(interval_s=0.05, sleep=calls.append)
    # 10 mL per tick: five ticks, no sleep after the terminal one
    assert calls == [0.05] * 4


def test_run_respects_max_ticks():
    session = TitrationSession()
    committed = TitrationDriver(session, speed=10).run(max_ticks=5)
    assert committed == 5
    assert session.current_base_volume_ml == 5.0
    assert session.status is SessionStatus.RUNNING


def test_advance_requires_running_session():
    session = TitrationSession()
    driver = TitrationDriver(session, speed=10)
    assert driver.advance(3) == []
    session.start()
    results = driver.advance(3)
    assert [r.sample.base_volume_ml for r in results] == [1.0, 2.0, 3.0]


def test_stop_takes_effect_before_next_tick():
    session = TitrationSession()
    driver = TitrationDriver(session, speed=10)

    def stop_at_equivalence(result):
        if result.reached_equivalence:
            session.stop()

    session.add_listener(stop_at_equivalence)
    session.start()
    results = driver.advance(100)

    assert len(results) == 25
    assert session.status is SessionStatus.STOPPED
    assert session.current_base_volume_ml == 25.0

    session.start()
    driver.advance(100)
    assert session.status is SessionStatus.FINISHED
    assert session.current_base_volume_ml == 50.0


def test_run_returns_immediately_when_finished():
    session = TitrationSession()
    session.add_discrete(50.0)
    assert TitrationDriver(session).run() == 0


def test_non_numeric_speed_rejected():
    with pytest.raises(InvalidArgument):
        TitrationDriver(TitrationSession(), speed="fast")


def test_advance_continues_after_max_ticks():
    session = TitrationSession()
    driver = TitrationDriver(session, speed=10)
    driver.run(max_ticks=5)

    results = driver.advance(2)

    assert [r.sample.base_volume_ml for r in results] == [6.0, 7.0]
    session.stop()
    assert driver.advance(2) == []
