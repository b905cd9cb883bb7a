import pytest

from rwgps_client.client.pagination import iter_rides
from rwgps_client.errors import TransportError


def _listing(total, available):
    """Handler serving ids 1..available with a declared total."""

    def handler(path, query):
        offset = int(query["offset"][-1])
        limit = int(query["limit"][-1])
        ids = range(offset + 1, min(offset + limit, available) + 1)
        results = ",".join(f'{{"id": {i}}}' for i in ids)
        return f'{{"results_count": {total}, "results": [{results}]}}'

    return handler


def test_iter_rides_walks_all_pages_in_order(make_server, make_client):
    server = make_server(dynamic={"/users/1/trips.json": _listing(7, 7)})

    ids = [ride.id for ride in iter_rides(make_client(server), 1, page_size=3)]

    assert ids == [1, 2, 3, 4, 5, 6, 7]
    assert len(server.calls_to("/users/1/trips.json")) == 3


def test_iter_rides_stops_on_empty_page(make_server, make_client):
    server = make_server(dynamic={"/users/1/trips.json": _listing(100, 4)})

    ids = [ride.id for ride in iter_rides(make_client(server), 1, page_size=3)]

    assert ids == [1, 2, 3, 4]
    assert len(server.calls_to("/users/1/trips.json")) == 3


def test_iter_rides_honours_start(make_server, make_client):
    server = make_server(dynamic={"/users/1/trips.json": _listing(5, 5)})

    ids = [ride.id for ride in iter_rides(make_client(server), 1, page_size=2, start=3)]

    assert ids == [4, 5]


def test_iter_rides_rejects_bad_page_size(make_server, make_client):
    with pytest.raises(ValueError):
        next(iter_rides(make_client(make_server()), 1, page_size=0))


def test_iter_rides_propagates_errors(make_server, make_client):
    with pytest.raises(TransportError):
        list(iter_rides(make_client(make_server()), 99, page_size=2))
