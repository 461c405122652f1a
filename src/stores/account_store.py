"""
Account repository: the built-in administrator, the employee roster and
the authenticated session.
"""
import logging
from typing import Optional, List, Dict, Any, Callable
from database.substrate import KeyValueSubstrate
from stores.models import Account, SessionState, ROLE_ADMIN, ROLE_EMPLOYEE
from utils.enricher import ProfileEnricher

logger = logging.getLogger(__name__)

EMPLOYEES_KEY = 'employees'
SESSION_KEY = 'user'

ADMIN_ID = 1
FIRST_EMPLOYEE_ID = 2


class AccountStore:
    """
    Authenticates against a fixed administrator plus a mutable employee
    roster, and keeps the current session.

    The session holds a detached copy of the logged-in account. The roster
    and the session are written to the substrate after every change.
    """

    def __init__(
        self,
        substrate: KeyValueSubstrate,
        admin_email: str,
        admin_password: str,
        admin_name: str = 'Administrador',
        avatar_base_url: str = 'https://api.dicebear.com/7.x/avatars/svg',
        on_logout: Optional[Callable[[], None]] = None
    ):
        """
        Initialize the store and restore roster and session.

        Args:
            substrate: Key-value substrate
            admin_email: Built-in administrator email
            admin_password: Built-in administrator password
            admin_name: Built-in administrator display name
            avatar_base_url: Endpoint used for default employee avatars
            on_logout: Called after logout (navigation to the login page)
        """
        self.substrate = substrate
        self.admin = Account(
            id=ADMIN_ID,
            name=admin_name,
            email=admin_email,
            password=admin_password,
            role=ROLE_ADMIN
        )
        self.avatar_base_url = avatar_base_url
        self.on_logout = on_logout

        self._employees: List[Account] = [
            Account.from_dict(record)
            for record in self.substrate.get_json(EMPLOYEES_KEY, default=[])
        ]
        saved_session = self.substrate.get_json(SESSION_KEY)
        self._session: Optional[Account] = Account.from_dict(saved_session) if saved_session else None

        logger.info(
            f"Account store initialized ({len(self._employees)} employees, "
            f"session={self.session_state.value})"
        )

    def _save_employees(self):
        self.substrate.set_json(EMPLOYEES_KEY, [employee.to_dict() for employee in self._employees])

    def _save_session(self):
        if self._session is None:
            self.substrate.remove(SESSION_KEY)
        else:
            self.substrate.set_json(SESSION_KEY, self._session.to_dict())

    def _find(self, employee_id: int) -> Optional[int]:
        for index, employee in enumerate(self._employees):
            if employee.id == employee_id:
                return index
        return None

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    @property
    def current_account(self) -> Optional[Account]:
        return self._session.copy() if self._session else None

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    @property
    def is_admin(self) -> bool:
        return self._session is not None and self._session.is_admin

    @property
    def session_state(self) -> SessionState:
        if self._session is None:
            return SessionState.ANONYMOUS
        if self._session.is_admin:
            return SessionState.AUTHENTICATED_ADMIN
        return SessionState.AUTHENTICATED_EMPLOYEE

    def login(self, email: str, password: str) -> bool:
        """
        Authenticate with plaintext credentials.

        The administrator is checked first, then the first roster entry
        whose email and password both match exactly.

        Returns:
            True on success; on failure the session is left unchanged
        """
        if email == self.admin.email and password == self.admin.password:
            account = self.admin
        else:
            account = next(
                (e for e in self._employees if e.email == email and e.password == password),
                None
            )

        if account is None:
            logger.warning(f"Failed login attempt for {email}")
            return False

        self._session = account.copy()
        self._save_session()
        logger.info(f"Logged in {email} ({account.role})")
        return True

    def logout(self):
        """Clear the session and hand control to the logout collaborator."""
        if self._session is not None:
            logger.info(f"Logged out {self._session.email}")
        self._session = None
        self._save_session()
        if self.on_logout:
            self.on_logout()

    def update_profile(self, data: Dict[str, Any]) -> Optional[Account]:
        """
        Self-service profile edit for the logged-in account.

        Employee edits are mirrored to the roster entry; administrator edits
        only change the session copy.

        Args:
            data: Profile fields to merge (id and role are ignored)

        Returns:
            Updated session account, or None when anonymous
        """
        if self._session is None:
            logger.warning("Profile update without an active session")
            return None

        self._session = self._session.merged(data)
        self._save_session()

        if self._session.role == ROLE_EMPLOYEE:
            index = self._find(self._session.id)
            if index is not None:
                self._employees[index] = self._session.copy()
                self._save_employees()

        logger.info(f"Updated profile of account {self._session.id}")
        return self._session.copy()

    # ------------------------------------------------------------------
    # Roster
    # ------------------------------------------------------------------

    @property
    def employees(self) -> List[Account]:
        return [employee.copy() for employee in self._employees]

    def add_employee(self, draft: Dict[str, Any]) -> Account:
        """
        Register a new employee.

        Args:
            draft: name, email, password and optional phone, position,
                department, image_src (id/role are ignored)

        Returns:
            The stored employee
        """
        enriched = ProfileEnricher.enrich_profile(draft, self.avatar_base_url)
        if self._employees:
            next_id = max(employee.id for employee in self._employees) + 1
        else:
            next_id = FIRST_EMPLOYEE_ID

        employee = Account(
            id=next_id,
            name=enriched['name'],
            email=enriched['email'],
            password=enriched['password'],
            role=ROLE_EMPLOYEE
        ).merged(enriched)

        self._employees.append(employee)
        self._save_employees()
        logger.info(f"Added employee {employee.id} - {employee.email}")
        return employee.copy()

    def update_employee(self, employee_id: int, data: Dict[str, Any]) -> List[Account]:
        """
        Merge fields into a roster entry. Unknown ids are ignored.

        Returns:
            Snapshot of the roster after the call
        """
        index = self._find(employee_id)
        if index is None:
            logger.warning(f"No employee found to update: {employee_id}")
            return self.employees

        self._employees[index] = self._employees[index].merged(data)
        self._save_employees()
        logger.info(f"Updated employee {employee_id}")
        return self.employees

    def remove_employee(self, employee_id: int) -> List[Account]:
        """
        Delete a roster entry. Removing an unknown id is a no-op.

        Returns:
            Snapshot of the roster after the call
        """
        remaining = [employee for employee in self._employees if employee.id != employee_id]
        if len(remaining) != len(self._employees):
            logger.info(f"Removed employee {employee_id}")
        self._employees = remaining
        self._save_employees()
        return self.employees

    def search_employees(
        self,
        term: str = '',
        position: Optional[str] = None,
        department: Optional[str] = None
    ) -> List[Account]:
        """Filter the roster by free text, position and department."""
        needle = term.lower()
        matches = []
        for employee in self._employees:
            haystack = [employee.name, employee.email, employee.position or '', employee.department or '']
            if needle and not any(needle in value.lower() for value in haystack):
                continue
            if position and employee.position != position:
                continue
            if department and employee.department != department:
                continue
            matches.append(employee.copy())
        return matches

    def get_statistics(self) -> Dict[str, Any]:
        """Counts for the admin overview."""
        departments = {employee.department for employee in self._employees if employee.department}
        return {
            'employees': len(self._employees),
            'departments': len(departments),
        }
