import json
import logging
import uuid
from fastapi.testclient import TestClient
from staff_api.main import app

client = TestClient(app)


def new_department(name='Engineering'):
    dept_id = f'dept-{uuid.uuid4().hex[:8]}'
    r = client.post('/departments', json={'id': dept_id, 'name': name, 'location': 'Berlin'})
    assert r.status_code == 201
    return dept_id


def employee_payload(**overrides):
    tag = uuid.uuid4().hex[:8]
    data = {'id': f'emp-{tag}', 'name': 'Ada Lovelace', 'email': f'ada.{tag}@example.com', 'position': 'Engineer', 'salary': 50000}
    data.update(overrides)
    return data


def test_employee_lifecycle():
    dept_id = new_department()
    payload = employee_payload()
    r = client.post(f'/departments/{dept_id}/employees', json=payload)
    assert r.status_code == 201
    created = r.json()
    assert created['department'] == 'Engineering'
    # fetch by id
    r2 = client.get(f"/employees/{payload['id']}")
    assert r2.status_code == 200
    assert r2.json() == created
    # listed globally and by department
    assert payload['id'] in {e['id'] for e in client.get('/employees').json()}
    assert [e['id'] for e in client.get(f'/departments/{dept_id}/employees').json()] == [payload['id']]
    assert [e['id'] for e in client.get(f'/departments/{dept_id}').json()['employees']] == [payload['id']]
    # update salary only
    r3 = client.put(f"/employees/{payload['id']}", json={**payload, 'salary': 60000})
    assert r3.status_code == 200
    assert r3.json()['salary'] == 60000
    assert r3.json()['department'] == 'Engineering'
    # delete, then it is gone
    r4 = client.delete(f"/employees/{payload['id']}")
    assert r4.status_code == 204
    assert client.get(f"/employees/{payload['id']}").status_code == 404
    assert client.delete(f"/employees/{payload['id']}").status_code == 404


def test_validation_errors_listed_together():
    dept_id = new_department()
    r = client.post(f'/departments/{dept_id}/employees', json=employee_payload(name='', email='not-an-email', position=' ', salary=0))
    assert r.status_code == 400
    assert set(r.json()['errors']) == {'name', 'email', 'position', 'salary'}


def test_duplicate_email_conflict():
    first = new_department()
    second = new_department('Operations')
    payload = employee_payload()
    assert client.post(f'/departments/{first}/employees', json=payload).status_code == 201
    r = client.post(f'/departments/{second}/employees', json={**payload, 'id': f"{payload['id']}-2"})
    assert r.status_code == 409
    assert payload['email'] in r.json()['detail']


def test_missing_resources_return_404():
    assert client.get('/departments/missing/employees').status_code == 404
    assert client.get('/departments/missing').status_code == 404
    assert client.post('/departments/missing/employees', json=employee_payload()).status_code == 404
    assert client.get('/employees/missing').status_code == 404
    assert client.put('/employees/missing', json=employee_payload()).status_code == 404


def test_empty_department_lists_nothing():
    dept_id = new_department()
    r = client.get(f'/departments/{dept_id}/employees')
    assert r.status_code == 200
    assert r.json() == []


def test_department_create_rules():
    r = client.post('/departments', json={'name': ''})
    assert r.status_code == 400
    assert r.json()['errors'] == {'name': 'Name is required'}
    dept_id = new_department()
    assert client.post('/departments', json={'id': dept_id, 'name': 'Again'}).status_code == 409
    assert dept_id in {d['id'] for d in client.get('/departments').json()}


def test_request_id_is_echoed():
    r = client.get('/health', headers={'X-Request-ID': 'abc123'})
    assert r.status_code == 200
    assert r.json() == {'status': 'ok'}
    assert r.headers['X-Request-ID'] == 'abc123'


def test_request_log_carries_resource_ids(caplog):
    caplog.set_level(logging.INFO, logger='staff_api.api')
    client.get('/employees/emp-logged')
    done = [r.getMessage() for r in caplog.records if r.getMessage().startswith('request_done')]
    assert done
    assert json.loads(done[-1].split(' ', 1)[1])['employee_id'] == 'emp-logged'
