import psycopg
import pytest
from sqlrunner.db.conninfo import parse_conninfo, to_connect_kwargs
from sqlrunner.errors import ConnectionStringError, DatabaseError


def test_parse_simple():
    params = parse_conninfo("sslmode=disable host=localhost dbname=test user=u password=p")
    assert params == {
        "sslmode": "disable",
        "host": "localhost",
        "dbname": "test",
        "user": "u",
        "password": "p",
    }


def test_parse_quoted_and_escaped():
    params = parse_conninfo(r"password='it\'s a secret' user=a\ b application_name=''")
    assert params["password"] == "it's a secret"
    assert params["user"] == "a b"
    assert params["application_name"] == ""


def test_parse_spaces_around_equals():
    assert parse_conninfo("  host = db   port= 6543 ") == {"host": "db", "port": "6543"}


def test_parse_empty_string():
    assert parse_conninfo("") == {}
    assert parse_conninfo("sslmode=disable ") == {"sslmode": "disable"}


def test_last_value_wins():
    params = parse_conninfo("sslmode=disable host=db sslmode=require")
    assert params["sslmode"] == "require"


@pytest.mark.parametrize("conninfo", [
    "host",
    "host=localhost dbname",
    "password='unterminated",
    "=value",
])
def test_parse_errors(conninfo):
    with pytest.raises(ConnectionStringError):
        parse_conninfo(conninfo)


def test_connection_string_error_is_database_error():
    assert issubclass(ConnectionStringError, DatabaseError)
    assert issubclass(ConnectionStringError, ValueError)


def test_connect_kwargs_mapping():
    kwargs = to_connect_kwargs(parse_conninfo(
        "sslmode=disable host=localhost port=5433 dbname=test user=u password=p connect_timeout=10"
    ))
    assert kwargs == {
        "ssl": "disable",
        "host": "localhost",
        "port": 5433,
        "database": "test",
        "user": "u",
        "password": "p",
        "timeout": 10.0,
    }


def test_connect_kwargs_multiple_hosts():
    kwargs = to_connect_kwargs({"host": "db1,db2", "port": "5432,5433"})
    assert kwargs["host"] == ["db1", "db2"]
    assert kwargs["port"] == [5432, 5433]


def test_hostaddr_used_when_host_missing():
    assert to_connect_kwargs({"hostaddr": "10.0.0.5"})["host"] == "10.0.0.5"
    assert to_connect_kwargs({"host": "db", "hostaddr": "10.0.0.5"})["host"] == "db"


def test_zero_connect_timeout_not_passed():
    assert "timeout" not in to_connect_kwargs({"connect_timeout": "0"})


def test_unknown_keyword_rejected_by_libpq():
    with pytest.raises(ConnectionStringError) as excinfo:
        parse_conninfo("sslmode=disable host=db search_path=core")
    assert isinstance(excinfo.value.__cause__, psycopg.ProgrammingError)


def test_runtime_parameters_go_to_server_settings():
    kwargs = to_connect_kwargs(parse_conninfo("host=db application_name=sqlrunner client_encoding=UTF8"))
    assert kwargs["server_settings"] == {"application_name": "sqlrunner", "client_encoding": "UTF8"}


def test_unsupported_client_keys_skipped(caplog):
    with caplog.at_level("WARNING", logger="db"):
        kwargs = to_connect_kwargs(parse_conninfo("host=db sslrootcert=/etc/ssl/root.crt"))
    assert kwargs == {"host": "db"}
    assert any("sslrootcert" in m for m in caplog.messages)


@pytest.mark.parametrize("params", [
    {"port": "abc"},
    {"connect_timeout": "soon"},
])
def test_connect_kwargs_invalid_numbers(params):
    with pytest.raises(ConnectionStringError):
        to_connect_kwargs(params)
