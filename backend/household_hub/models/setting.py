"""
AppSetting database model (simple key/value store).
"""

from sqlalchemy import Column, String, Text

from household_hub.database import Base


class AppSetting(Base):
    __tablename__ = "app_settings"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=True)
