from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .availability.mysql_availability_repository import MySQLAvailabilityRepository
from .availability.repository import AvailabilityRepository
from .availability.service import AvailabilityService
from .database.connection import DatabaseConnection
from .products.mysql_product_repository import MySQLProductRepository
from .products.repository import ProductRepository
from .products.service import ProductService
from .reports.service import AttendanceReportService
from .sessions.mysql_session_repository import MySQLWorkSessionRepository
from .sessions.repository import WorkSessionRepository
from .sessions.service import WorkSessionService
from .staff.mysql_staff_repository import MySQLStaffRepository
from .staff.repository import StaffRepository
from .staff.service import StaffService
from .users.mysql_user_repository import MySQLAccountRepository, MySQLRoleRepository
from .users.repository import AccountRepository, RoleRepository
from .users.service import AuthService, RoleService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    accounts_repo: AccountRepository
    roles_repo: RoleRepository
    staff_repo: StaffRepository
    products_repo: ProductRepository
    sessions_repo: WorkSessionRepository
    availability_repo: AvailabilityRepository

    role_service: RoleService
    auth_service: AuthService
    staff_service: StaffService
    product_service: ProductService
    work_session_service: WorkSessionService
    availability_service: AvailabilityService
    attendance_report_service: AttendanceReportService


def wire_container(
    *,
    accounts_repo: AccountRepository,
    roles_repo: RoleRepository,
    staff_repo: StaffRepository,
    products_repo: ProductRepository,
    sessions_repo: WorkSessionRepository,
    availability_repo: AvailabilityRepository,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build the services on top of any repository implementations (MySQL or in-memory)."""

    role_service = RoleService(roles_repo)
    return Container(
        conn=conn,
        accounts_repo=accounts_repo,
        roles_repo=roles_repo,
        staff_repo=staff_repo,
        products_repo=products_repo,
        sessions_repo=sessions_repo,
        availability_repo=availability_repo,
        role_service=role_service,
        auth_service=AuthService(accounts_repo, role_service, staff_repo),
        staff_service=StaffService(staff_repo),
        product_service=ProductService(products_repo),
        work_session_service=WorkSessionService(sessions_repo, staff_repo),
        availability_service=AvailabilityService(availability_repo, staff_repo),
        attendance_report_service=AttendanceReportService(sessions_repo, staff_repo),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.from_dict(db_config)
    return wire_container(
        conn=conn,
        accounts_repo=MySQLAccountRepository(conn),
        roles_repo=MySQLRoleRepository(conn),
        staff_repo=MySQLStaffRepository(conn),
        products_repo=MySQLProductRepository(conn),
        sessions_repo=MySQLWorkSessionRepository(conn),
        availability_repo=MySQLAvailabilityRepository(conn),
    )
