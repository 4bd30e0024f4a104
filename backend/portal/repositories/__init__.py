from portal.repositories.announcement_repository import AnnouncementRepository
from portal.repositories.availability_interval_repository import AvailabilityIntervalRepository
from portal.repositories.comment_repository import CommentRepository
from portal.repositories.employee_repository import EmployeeRepository
from portal.repositories.employee_request_repository import EmployeeRequestRepository
from portal.repositories.notification_repository import NotificationRepository
from portal.repositories.system_setting_repository import SystemSettingRepository

__all__ = [
    "AnnouncementRepository",
    "AvailabilityIntervalRepository",
    "CommentRepository",
    "EmployeeRepository",
    "EmployeeRequestRepository",
    "NotificationRepository",
    "SystemSettingRepository",
]
