from sqlalchemy.orm import Session

from portal.models.system_setting import SystemSetting


class SystemSettingRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_value(self, key: str) -> str | None:
        setting = self.db.query(SystemSetting).filter(SystemSetting.key == key).first()
        return None if setting is None else setting.value  # type: ignore[return-value]

    def set_value(self, key: str, value: str) -> SystemSetting:
        setting = self.db.query(SystemSetting).filter(SystemSetting.key == key).first()
        if setting is None:
            setting = SystemSetting(key=key, value=value)
            self.db.add(setting)
        else:
            setting.value = value  # type: ignore[assignment]
        self.db.commit()
        self.db.refresh(setting)
        return setting
