import pytest
from staff_api.exceptions import DuplicateResourceError, NotFoundError, ValidationError
from staff_api.schemas import DepartmentIn, EmployeeIn
from staff_api.services import DepartmentService, EmployeeService


def test_add_and_get_department_with_employees(session):
    svc = DepartmentService(session)
    created = svc.add_department(DepartmentIn(id='eng', name='Engineering', location='Berlin'))
    assert created.employees == []
    EmployeeService(session).add_employee('eng', EmployeeIn(id='e1', name='Ada', email='ada@example.com', position='Engineer', salary=1))
    dept = svc.get_department_by_id('eng')
    assert dept.location == 'Berlin'
    assert [e.id for e in dept.employees] == ['e1']
    assert dept.employees[0].department == 'Engineering'


def test_department_rules(session):
    svc = DepartmentService(session)
    with pytest.raises(ValidationError) as exc_info:
        svc.add_department(DepartmentIn(id='blank', name=' '))
    assert exc_info.value.errors == {'name': 'Name is required'}
    svc.add_department(DepartmentIn(id='eng', name='Engineering'))
    with pytest.raises(DuplicateResourceError):
        svc.add_department(DepartmentIn(id='eng', name='Again'))
    assert [d.id for d in svc.list_all_departments()] == ['eng']


def test_get_missing_department(session):
    with pytest.raises(NotFoundError):
        DepartmentService(session).get_department_by_id('nowhere')


def test_generated_department_id(session):
    created = DepartmentService(session).add_department(DepartmentIn(name='Research'))
    assert created.id
    assert DepartmentService(session).get_department_by_id(created.id).name == 'Research'
