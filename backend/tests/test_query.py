"""
Unit tests for services/query.py — donor directory filters and latest donors.
"""

import datetime

import pytest

from conftest import make_new_user
from lifeshare.services.query import get_all_donors_filtered, get_latest_donors, parse_limit


@pytest.fixture
def directory(store):
    """Four donors across two cities/states and three blood groups."""
    store.create_user(make_new_user(username="alice", full_name="Alice Moreau", city="Boston", state="MA", blood_group="O+"))
    store.create_user(make_new_user(username="bob", full_name="Bob Stone", city="Boston", state="MA", blood_group="A+"))
    store.create_user(make_new_user(username="carol", full_name="Carol Diaz", city="Austin", state="TX", blood_group="O+"))
    store.create_user(make_new_user(username="dan", full_name="Dan Boswell", city="Dallas", state="TX", blood_group="AB-"))
    return store


def _names(users):
    return [u.username for u in users]


def test_no_filters_returns_everyone_in_order(directory):
    assert _names(get_all_donors_filtered(directory)) == ["alice", "bob", "carol", "dan"]


def test_empty_strings_are_pass_through(directory):
    assert len(get_all_donors_filtered(directory, blood_group="", location="", search_term="")) == 4


def test_blood_group_case_insensitive(directory):
    assert _names(get_all_donors_filtered(directory, blood_group="o+")) == ["alice", "carol"]
    assert _names(get_all_donors_filtered(directory, blood_group="ab-")) == ["dan"]


def test_blood_group_is_exact_not_substring(directory):
    # "B-" must not match the stored "AB-"
    assert get_all_donors_filtered(directory, blood_group="B-") == []


def test_location_matches_city_or_state(directory):
    assert _names(get_all_donors_filtered(directory, location="boston")) == ["alice", "bob"]
    assert _names(get_all_donors_filtered(directory, location="tx")) == ["carol", "dan"]
    assert _names(get_all_donors_filtered(directory, location="AUS")) == ["carol"]


def test_search_matches_name_city_or_state(directory):
    # "bos" hits Boston (city) and Boswell (name)
    assert _names(get_all_donors_filtered(directory, search_term="bos")) == ["alice", "bob", "dan"]
    assert _names(get_all_donors_filtered(directory, search_term="DIAZ")) == ["carol"]


def test_filters_combine_with_and(directory):
    result = get_all_donors_filtered(directory, blood_group="O+", location="boston")
    assert _names(result) == ["alice"]

    result = get_all_donors_filtered(directory, blood_group="O+", location="tx", search_term="carol")
    assert _names(result) == ["carol"]

    assert get_all_donors_filtered(directory, blood_group="A+", location="tx") == []


def test_filters_do_not_write(directory):
    before = directory.get_all_users()
    get_all_donors_filtered(directory, blood_group="O+", location="boston", search_term="alice")
    assert directory.get_all_users() == before


def test_latest_donors_ordering(store):
    jan = store.create_user(make_new_user(username="jan", last_donation=datetime.date(2024, 1, 1)))
    mar = store.create_user(make_new_user(username="mar", last_donation=datetime.date(2024, 3, 1)))
    store.create_user(make_new_user(username="never"))

    assert get_latest_donors(store, 2) == [mar, jan]


def test_latest_donors_excludes_never_donated(store):
    store.create_user(make_new_user(username="never"))
    dated = store.create_user(make_new_user(username="dated", last_donation=datetime.date(2023, 5, 5)))
    assert get_latest_donors(store, 10) == [dated]


def test_latest_donors_ties_keep_store_order(store):
    same = datetime.date(2024, 2, 2)
    first = store.create_user(make_new_user(username="first", last_donation=same))
    second = store.create_user(make_new_user(username="second", last_donation=same))
    newest = store.create_user(make_new_user(username="newest", last_donation=datetime.date(2024, 2, 3)))

    assert get_latest_donors(store, 3) == [newest, first, second]


def test_latest_donors_default_limit(store):
    for i in range(5):
        store.create_user(make_new_user(username=f"u{i}", last_donation=datetime.date(2024, 1, 1 + i)))

    assert _names(get_latest_donors(store)) == ["u4", "u3", "u2"]
    assert len(get_latest_donors(store, 0)) == 3
    assert len(get_latest_donors(store, "junk")) == 3


def test_latest_donors_sees_recorded_donations(store):
    from lifeshare.models.donation import NewDonation

    a = store.create_user(make_new_user(username="a"))
    b = store.create_user(make_new_user(username="b"))
    today = datetime.date(2024, 6, 1)
    store.record_donation(NewDonation(a.id, datetime.date(2024, 5, 1), "Boston"), today=today)
    store.record_donation(NewDonation(b.id, datetime.date(2024, 5, 20), "Boston"), today=today)

    assert _names(get_latest_donors(store)) == ["b", "a"]


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, 3),
        ("5", 5),
        ("5.5", 5),
        ("5abc", 5),
        (" 4", 4),
        (6.9, 6),
        (7, 7),
        ("0", 3),
        ("-2", 3),
        ("abc", 3),
        ("", 3),
        (True, 3),
    ],
)
def test_parse_limit(raw, expected):
    assert parse_limit(raw) == expected


def test_parse_limit_custom_default():
    assert parse_limit("nope", default=10) == 10
