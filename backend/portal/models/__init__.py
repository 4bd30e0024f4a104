from portal.models.announcement import Announcement, AnnouncementPosition
from portal.models.availability_interval import AvailabilityInterval
from portal.models.comment import Comment, ThreadType
from portal.models.employee import Employee, EmployeeRole, EmployeeStatus, Position
from portal.models.employee_request import EmployeeRequest, RequestStatus, RequestType
from portal.models.notification import Notification
from portal.models.system_setting import NOTIFICATION_EMAILS_KEY, SystemSetting

__all__ = [
    "Announcement",
    "AnnouncementPosition",
    "AvailabilityInterval",
    "Comment",
    "Employee",
    "EmployeeRequest",
    "EmployeeRole",
    "EmployeeStatus",
    "NOTIFICATION_EMAILS_KEY",
    "Notification",
    "Position",
    "RequestStatus",
    "RequestType",
    "SystemSetting",
    "ThreadType",
]
