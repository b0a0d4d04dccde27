import threading

from hexdle.services.rooms import MatchCoordinator, RoomRegistry


def _pair(coordinator, room='abc'):
    assert coordinator.join(room, 'a') == 1
    assert coordinator.join(room, 'b') == 2
    return coordinator.registry.get(room)


def test_join_assigns_slots_and_shares_color(local_coordinator, notifier):
    assert local_coordinator.join('abc', 'a') == 1
    assert notifier.events('a', 'assignPlayerNumber') == [{'number': 1}]
    assert notifier.events('a', 'receiveHexCode') == ['a1b2c3']
    assert notifier.events('a', 'waitingForPlayer')
    assert not notifier.events('a', 'gameStart')

    assert local_coordinator.join('abc', 'b') == 2
    assert notifier.events('b', 'assignPlayerNumber') == [{'number': 2}]
    assert notifier.events('b', 'receiveHexCode') == ['a1b2c3']
    assert not notifier.events('b', 'waitingForPlayer')
    assert notifier.events('a', 'playerJoined') == ['b has joined the room']
    assert len(notifier.events('a', 'gameStart')) == 1
    assert len(notifier.events('b', 'gameStart')) == 1


def test_third_player_is_turned_away(local_coordinator, notifier):
    room = _pair(local_coordinator)
    assert local_coordinator.join('abc', 'c') is None
    assert room.players == ['a', 'b']
    assert 'c' not in room.results
    assert notifier.names('c') == ['roomFull']
    assert not notifier.events('a', 'playerJoined')[1:]


def test_join_requires_room_and_single_seat(local_coordinator, notifier):
    assert local_coordinator.join('', 'a') is None
    assert notifier.events('a', 'error') == [{'message': 'room is required'}]

    local_coordinator.join('abc', 'a')
    assert local_coordinator.join('xyz', 'a') is None
    assert 'xyz' not in local_coordinator.registry
    assert notifier.events('a', 'error')[-1] == {'message': 'already in room abc'}


def test_guess_goes_to_opponent_only(local_coordinator, notifier):
    _pair(local_coordinator)
    notifier.flush()
    assert local_coordinator.relay_guess('a', 'ABCDEF')
    assert notifier.events('b', 'receiveGuess') == [{'guess': 'ABCDEF', 'player': 1}]
    assert notifier.inbox['a'] == []
    assert not local_coordinator.relay_guess('stranger', 'ABCDEF')


def test_results_resolve_regardless_of_order(local_coordinator, notifier):
    _pair(local_coordinator, 'one')
    assert local_coordinator.submit_result('a', True, 30) is None
    assert notifier.events('b', 'receiveWinLose') == [{'res': 'win', 'time': 30, 'player': 1}]
    forward = local_coordinator.submit_result('b', True, 20)

    local_coordinator.join('two', 'c')
    local_coordinator.join('two', 'd')
    assert local_coordinator.submit_result('d', True, 20) is None
    backward = local_coordinator.submit_result('c', True, 30)

    assert forward.outcome == backward.outcome
    assert forward.outcome.winner == 2
    assert forward.outcome.message == 'Player 2 wins with a time of 20 seconds!'
    finish = notifier.events('a', 'finishGame')
    assert finish == notifier.events('b', 'finishGame')
    assert finish[0]['message'] == 'Player 2 wins with a time of 20 seconds!'


def test_resolution_removes_room_and_id_can_be_reused(local_coordinator, notifier):
    _pair(local_coordinator)
    local_coordinator.submit_result('a', False, 60)
    report = local_coordinator.submit_result('b', False, 55)
    assert report.outcome.draw
    assert report.target_color == 'a1b2c3'
    assert 'abc' not in local_coordinator.registry
    assert notifier.closed == ['room:abc']

    # a late or repeated submission for the resolved room is dropped
    assert local_coordinator.submit_result('a', True, 1, room_id='abc') is None

    notifier.flush()
    assert local_coordinator.join('abc', 'e') == 1
    assert notifier.events('e', 'receiveHexCode') == ['d4e5f6']


def test_duplicate_result_is_ignored(local_coordinator):
    room = _pair(local_coordinator)
    local_coordinator.submit_result('a', True, 10)
    assert local_coordinator.submit_result('a', False, 99) is None
    assert room.finished_count == 1
    assert room.results['a'].won is True
    assert room.results['a'].elapsed_seconds == 10


def test_unknown_room_is_ignored(local_coordinator, notifier):
    assert local_coordinator.submit_result('a', True, 10, room_id='ghost') is None
    assert local_coordinator.submit_result('a', True, 10) is None
    assert notifier.inbox == {}


def test_last_player_leaving_removes_room(local_coordinator):
    local_coordinator.join('abc', 'a')
    room = local_coordinator.disconnect('a')
    assert room.closed
    assert 'abc' not in local_coordinator.registry
    assert local_coordinator.disconnect('a') is None


def test_one_player_leaving_keeps_room(local_coordinator, notifier):
    room = _pair(local_coordinator)
    local_coordinator.submit_result('b', True, 15)
    notifier.flush()

    local_coordinator.disconnect('a')
    assert 'abc' in local_coordinator.registry
    assert room.players == ['b']
    assert room.finished_count == 1
    assert notifier.names('b') == ['playerLeft', 'assignPlayerNumber']
    assert notifier.events('b', 'assignPlayerNumber') == [{'number': 1}]
    assert not notifier.events('b', 'finishGame')


def test_leaving_after_submitting_withdraws_result(local_coordinator, notifier):
    room = _pair(local_coordinator)
    local_coordinator.submit_result('a', True, 15)
    notifier.flush()

    local_coordinator.disconnect('a')
    assert room.finished_count == 0
    assert notifier.names('b') == ['playerLeft', 'assignPlayerNumber']

    # a newcomer takes the open seat and the match can still finish
    assert local_coordinator.join('abc', 'c') == 2
    local_coordinator.submit_result('b', False, 40)
    report = local_coordinator.submit_result('c', True, 70)
    assert report.outcome.winner == 2
    assert report.outcome.time == 70


def test_simultaneous_results_resolve_exactly_once(notifier):
    coordinator = MatchCoordinator(RoomRegistry(), notifier)
    for round_no in range(200):
        room_id = f'race-{round_no}'
        first, second = f'a{round_no}', f'b{round_no}'
        coordinator.join(room_id, first)
        coordinator.join(room_id, second)

        barrier = threading.Barrier(2, timeout=5)
        reports = []

        def submit(sid, seconds):
            barrier.wait()
            reports.append(coordinator.submit_result(sid, True, seconds))

        threads = [
            threading.Thread(target=submit, args=(first, 30)),
            threading.Thread(target=submit, args=(second, 20)),
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=5)

        completed = [r for r in reports if r is not None]
        assert len(reports) == 2
        assert len(completed) == 1
        assert completed[0].outcome.winner == 2
        assert room_id not in coordinator.registry
        assert len(notifier.events(first, 'finishGame')) == 1
