from portal.schemas.announcement import (
    AnnouncementCreate,
    AnnouncementPublishResponse,
    AnnouncementResponse,
)
from portal.schemas.availability import (
    AvailabilityIntervalCreate,
    AvailabilityIntervalResponse,
    BlockedDaysResponse,
    DateRangeRequest,
)
from portal.schemas.comment import (
    CommentCreate,
    CommentNodeResponse,
    CommentResponse,
    ThreadOpenResponse,
    UnseenCountResponse,
)
from portal.schemas.employee_request import (
    EmployeeRequestCreate,
    EmployeeRequestResponse,
    EmployeeRequestStatusUpdate,
)
from portal.schemas.notification import (
    AnnouncementNotificationRequest,
    DispatchResultResponse,
    DispatchSummaryResponse,
    DispatchTimeoutResponse,
    NotificationCountResponse,
    NotificationResponse,
    RequestNotificationRequest,
)
from portal.schemas.system_setting import NotificationEmailsResponse, NotificationEmailsUpdate

__all__ = [
    "AnnouncementCreate",
    "AnnouncementNotificationRequest",
    "AnnouncementPublishResponse",
    "AnnouncementResponse",
    "AvailabilityIntervalCreate",
    "AvailabilityIntervalResponse",
    "BlockedDaysResponse",
    "CommentCreate",
    "CommentNodeResponse",
    "CommentResponse",
    "DateRangeRequest",
    "DispatchResultResponse",
    "DispatchSummaryResponse",
    "DispatchTimeoutResponse",
    "EmployeeRequestCreate",
    "EmployeeRequestResponse",
    "EmployeeRequestStatusUpdate",
    "NotificationCountResponse",
    "NotificationEmailsResponse",
    "NotificationEmailsUpdate",
    "NotificationResponse",
    "RequestNotificationRequest",
    "ThreadOpenResponse",
    "UnseenCountResponse",
]
