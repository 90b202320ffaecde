
import pytest
from orasim.server.main import create_app


@pytest.fixture
def app():
    return create_app({'TESTING': True, 'SESSION_FILE': None})


@pytest.fixture
def client(app):
    return app.test_client()


def run(client, sql):
    response = client.post('/api/query', json={'sql': sql})
    assert response.status_code == 200
    return response.get_json()


def test_query_round_trip(client):
    result = run(client, "CREATE TABLE emp (id NUMBER, name VARCHAR2(20));")
    assert result['success'] is True
    assert result['message'] == 'Table emp created.'
    assert result['rowCount'] == 0
    assert 'executionTime' in result

    run(client, "INSERT INTO emp VALUES (1, 'Alice')")
    result = run(client, "SELECT * FROM emp")
    assert result['columns'] == ['ID', 'NAME']
    assert result['data'] == [{'ID': 1, 'NAME': 'Alice'}]
    assert result['executionPlan']['operation'] == 'SELECT STATEMENT'


def test_query_errors_are_results(client):
    result = run(client, "SELECT * FROM missing")
    assert result['success'] is False
    assert result['error'] == 'ORA-00942: table or view does not exist: missing'
    assert 'message' not in result


@pytest.mark.parametrize("body", [None, {}, {'sql': ''}, {'query': 'SELECT 1 FROM DUAL'}])
def test_query_requires_sql(client, body):
    response = client.post('/api/query', json=body)
    assert response.status_code == 400


def test_tables(client):
    run(client, "CREATE TABLE emp (id NUMBER)")
    run(client, "CREATE INDEX emp_idx ON emp (id)")
    run(client, "INSERT INTO emp VALUES (1)")

    tables = client.get('/api/tables').get_json()
    assert [t['name'] for t in tables] == ['EMP']
    assert tables[0]['row_count'] == 1
    assert tables[0]['indexes'][0]['name'] == 'EMP_IDX'
    assert 'rows' not in tables[0]

    detail = client.get('/api/tables/emp').get_json()
    assert detail['rows'] == [{'ID': 1}]
    assert detail['columns'][0]['data_type'] == 'DECIMAL(38,10)'

    assert client.get('/api/tables/nope').status_code == 404


def test_reset(client):
    run(client, "CREATE TABLE a (id NUMBER)")
    run(client, "CREATE TABLE b (id NUMBER)")

    response = client.post('/api/reset')
    assert response.get_json()['tables_dropped'] == 2
    assert client.get('/api/tables').get_json() == []


def test_session(client):
    state = client.get('/api/session').get_json()
    assert state['current_schema'] == 'ORACLE_SIM'

    response = client.post('/api/session', json={'command': 'SET AUTOCOMMIT OFF'})
    body = response.get_json()
    assert body['output'] == 'AUTOCOMMIT is OFF.'
    assert body['session']['auto_commit'] is False

    assert client.post('/api/session', json={}).status_code == 400


def test_apps_do_not_share_catalogs():
    first = create_app({'TESTING': True, 'SESSION_FILE': None}).test_client()
    second = create_app({'TESTING': True, 'SESSION_FILE': None}).test_client()
    run(first, "CREATE TABLE only_here (id NUMBER)")
    assert second.get('/api/tables').get_json() == []
