import pytest

from olake.mysql_config import MySQLCDC, MySQLConfig, parse_mysql_cdc

PASSWORD = "password"


def _valid(**overrides):
    password = PASSWORD
    values = dict(host="db.example.com", port=3306, username="user", password=password)
    values.update(overrides)
    return MySQLConfig(**values)


def test_uri_defaults_port_and_host():
    password = PASSWORD
    cfg = MySQLConfig(username="user", password=password, database="shop")
    uri = cfg.uri()
    assert cfg.port == 3306
    assert uri == "user:password@tcp(localhost:3306)/shop"


def test_uri_keeps_host_and_port():
    cfg = _valid(port=3307, database="shop")
    assert "@tcp(db.example.com:3307)/shop" in cfg.uri()


def test_uri_escapes_credentials():
    cfg = _valid(username="a b@c")
    assert cfg.uri().startswith("a+b%40c:")


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"host": ""}, "empty host name"),
        ({"host": "http://db"}, "http or https"),
        ({"host": "https://db"}, "http or https"),
        ({"port": 0}, "invalid port number"),
        ({"port": 65536}, "invalid port number"),
        ({"username": ""}, "username is required"),
        ({"password": ""}, "password is required"),
    ],
)
def test_validate_errors(overrides, message):
    with pytest.raises(ValueError, match=message):
        _valid(**overrides).validate()


def test_validate_fills_defaults():
    cfg = _valid()
    cfg.validate()
    assert cfg.database == "mysql"
    assert cfg.max_threads == 3
    assert cfg.retry_count == 3


def test_validate_keeps_given_values():
    cfg = _valid(database="shop", max_threads=8, retry_count=5)
    cfg.validate()
    assert (cfg.database, cfg.max_threads, cfg.retry_count) == ("shop", 8, 5)


def test_parse_cdc_default_wait():
    assert parse_mysql_cdc({"intial_wait_time": 0}) == MySQLCDC(initial_wait_time=10)


def test_parse_cdc_given_wait():
    assert parse_mysql_cdc({"intial_wait_time": 5}) == MySQLCDC(initial_wait_time=5)


@pytest.mark.parametrize("value", [None, {}, {"replication_slot": "slot"}, "cdc"])
def test_parse_cdc_absent(value):
    assert parse_mysql_cdc(value) is None