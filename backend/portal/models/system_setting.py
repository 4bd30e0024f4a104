from sqlalchemy import Column, DateTime, String, Text, func

from portal.core.database import Base

# Comma-separated list of addresses that receive new-request emails
NOTIFICATION_EMAILS_KEY = "correo_notificaciones"


class SystemSetting(Base):
    __tablename__ = "system_settings"

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
