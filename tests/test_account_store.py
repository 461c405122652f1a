import json

from conftest import ADMIN_EMAIL, ADMIN_PASSWORD, make_employee
from database.substrate import MemorySubstrate
from stores.account_store import AccountStore, EMPLOYEES_KEY, SESSION_KEY
from stores.models import SessionState


def _store(substrate, **kwargs):
    return AccountStore(substrate, admin_email=ADMIN_EMAIL, admin_password=ADMIN_PASSWORD, **kwargs)


def test_admin_login_succeeds(account_store, substrate):
    assert account_store.login(ADMIN_EMAIL, ADMIN_PASSWORD) is True

    assert account_store.session_state is SessionState.AUTHENTICATED_ADMIN
    assert account_store.is_admin is True
    assert account_store.current_account.role == "admin"
    assert account_store.current_account.id == 1
    assert json.loads(substrate.data[SESSION_KEY])["email"] == ADMIN_EMAIL


def test_failed_login_leaves_session_unchanged(account_store):
    assert account_store.login("x@x.com", "wrong") is False
    assert account_store.session_state is SessionState.ANONYMOUS

    account_store.login(ADMIN_EMAIL, ADMIN_PASSWORD)
    assert account_store.login("x@x.com", "wrong") is False
    assert account_store.current_account.email == ADMIN_EMAIL


def test_employee_login_is_exact_match(account_store):
    account_store.add_employee(make_employee())

    assert account_store.login("MARIA@engipec.com.br", "segredo") is False
    assert account_store.login("maria@engipec.com.br", "Segredo") is False
    assert account_store.login("maria@engipec.com.br", "segredo") is True
    assert account_store.session_state is SessionState.AUTHENTICATED_EMPLOYEE
    assert account_store.is_admin is False


def test_logout_clears_session_and_navigates(substrate):
    calls = []
    store = _store(substrate, on_logout=lambda: calls.append("login"))
    store.login(ADMIN_EMAIL, ADMIN_PASSWORD)

    store.logout()

    assert store.current_account is None
    assert store.is_authenticated is False
    assert SESSION_KEY not in substrate.data
    assert calls == ["login"]


def test_session_restored_on_start(substrate):
    store = _store(substrate)
    store.add_employee(make_employee())
    store.login("maria@engipec.com.br", "segredo")

    restored = _store(substrate)

    assert restored.session_state is SessionState.AUTHENTICATED_EMPLOYEE
    assert restored.current_account.email == "maria@engipec.com.br"
    assert [e.id for e in restored.employees] == [2]


def test_employee_ids_start_at_two_and_follow_max(account_store):
    assert account_store.add_employee(make_employee(email="a@x.com")).id == 2
    assert account_store.add_employee(make_employee(email="b@x.com")).id == 3

    account_store.remove_employee(2)

    assert account_store.add_employee(make_employee(email="c@x.com")).id == 4


def test_add_employee_forces_role_and_default_avatar(account_store):
    employee = account_store.add_employee(make_employee(role="admin", id=1))

    assert employee.role == "employee"
    assert employee.id == 2
    assert employee.image_src == "https://api.dicebear.com/7.x/avatars/svg?seed=maria@engipec.com.br"


def test_add_employee_keeps_supplied_avatar(account_store):
    employee = account_store.add_employee(make_employee(image_src="data:image/png;base64,xyz"))

    assert employee.image_src == "data:image/png;base64,xyz"


def test_update_employee_merges_fields(account_store, substrate):
    account_store.add_employee(make_employee())

    account_store.update_employee(2, {"department": "Obras", "role": "admin"})

    employee = account_store.employees[0]
    assert employee.department == "Obras"
    assert employee.role == "employee"
    assert employee.position == "Arquiteto"
    assert json.loads(substrate.data[EMPLOYEES_KEY])[0]["department"] == "Obras"


def test_update_employee_unknown_id_is_noop(account_store):
    account_store.add_employee(make_employee())

    result = account_store.update_employee(9, {"name": "Ghost"})

    assert [e.name for e in result] == ["Maria Souza"]


def test_remove_employee_is_idempotent(account_store):
    account_store.add_employee(make_employee())

    account_store.remove_employee(2)
    assert account_store.remove_employee(2) == []


def test_employee_profile_update_syncs_roster(account_store):
    account_store.add_employee(make_employee())
    account_store.login("maria@engipec.com.br", "segredo")

    account_store.update_profile({"phone": "11987654321", "role": "admin"})

    assert account_store.current_account.phone == "11987654321"
    assert account_store.session_state is SessionState.AUTHENTICATED_EMPLOYEE
    assert account_store.employees[0].phone == "11987654321"


def test_admin_profile_update_is_not_mirrored(account_store, substrate):
    account_store.add_employee(make_employee())
    account_store.login(ADMIN_EMAIL, ADMIN_PASSWORD)

    account_store.update_profile({"name": "Chefe"})

    assert account_store.current_account.name == "Chefe"
    assert [e.name for e in account_store.employees] == ["Maria Souza"]
    assert json.loads(substrate.data[SESSION_KEY])["name"] == "Chefe"


def test_update_profile_without_session_is_noop(account_store, substrate):
    assert account_store.update_profile({"name": "Nobody"}) is None
    assert SESSION_KEY not in substrate.data


def test_session_is_a_detached_copy(account_store):
    account_store.add_employee(make_employee())
    account_store.login("maria@engipec.com.br", "segredo")

    account_store.update_employee(2, {"name": "Renamed"})

    assert account_store.current_account.name == "Maria Souza"


def test_search_employees(account_store):
    account_store.add_employee(make_employee())
    account_store.add_employee(make_employee(name="João", email="joao@x.com", position="Técnico", department="Obras"))

    assert [e.name for e in account_store.search_employees("obras")] == ["João"]
    assert [e.name for e in account_store.search_employees(position="Arquiteto")] == ["Maria Souza"]
    assert len(account_store.search_employees()) == 2
    assert account_store.get_statistics() == {"employees": 2, "departments": 2}


def test_roster_reloaded_from_persisted_camel_case():
    substrate = MemorySubstrate({
        EMPLOYEES_KEY: '[{"id": 5, "name": "Ana", "email": "ana@x.com", "password": "p",'
                       ' "role": "employee", "imageSrc": "blob:ana"}]'
    })

    store = _store(substrate)

    assert store.employees[0].image_src == "blob:ana"
    assert store.add_employee(make_employee()).id == 6


def test_unreadable_roster_starts_empty():
    substrate = MemorySubstrate({EMPLOYEES_KEY: "{not json"})

    store = _store(substrate)

    assert store.employees == []
