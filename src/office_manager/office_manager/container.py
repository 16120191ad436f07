from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .collaborators.mysql_collaborator_repository import MySQLCollaboratorRepository
from .collaborators.repository import CollaboratorRepository
from .database.connection import DBConfig, DatabaseConnection
from .installments.mysql_installment_repository import MySQLInstallmentRepository
from .installments.repository import InstallmentRepository
from .installments.service import InstallmentService
from .payroll.service import PayrollReportService
from .projects.mysql_project_repository import MySQLProjectRepository
from .projects.repository import ProjectRepository
from .timesheets.mysql_timesheet_repository import MySQLTimesheetRepository
from .timesheets.repository import TimesheetRepository
from .timesheets.service import TimesheetService


@dataclass(frozen=True)
class Container:
    timesheets_repo: TimesheetRepository
    collaborators_repo: CollaboratorRepository
    installments_repo: InstallmentRepository
    projects_repo: ProjectRepository

    timesheet_service: TimesheetService
    payroll_report_service: PayrollReportService
    installment_service: InstallmentService


def build_services(
    *,
    timesheets_repo: TimesheetRepository,
    collaborators_repo: CollaboratorRepository,
    installments_repo: InstallmentRepository,
    projects_repo: ProjectRepository,
) -> Container:
    """Wire services on top of any repository implementations."""
    return Container(
        timesheets_repo=timesheets_repo,
        collaborators_repo=collaborators_repo,
        installments_repo=installments_repo,
        projects_repo=projects_repo,
        timesheet_service=TimesheetService(timesheets_repo, collaborators_repo),
        payroll_report_service=PayrollReportService(timesheets_repo, collaborators_repo),
        installment_service=InstallmentService(installments_repo, projects_repo),
    )


def build_container(*, db_config: Mapping[str, Any]) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))
    return build_services(
        timesheets_repo=MySQLTimesheetRepository(conn),
        collaborators_repo=MySQLCollaboratorRepository(conn),
        installments_repo=MySQLInstallmentRepository(conn),
        projects_repo=MySQLProjectRepository(conn),
    )
