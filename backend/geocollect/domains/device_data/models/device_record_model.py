from datetime import datetime
from typing import Optional
from sqlmodel import Field, SQLModel
from sqlalchemy import BigInteger, String, Text


class DeviceRecordBase(SQLModel):
    """一次採集的扁平記錄：座標、三個供應商的地址欄位與設備資訊"""

    timestamp: int = Field(sa_type=BigInteger, index=True)  # 毫秒
    ip: Optional[str] = Field(default=None, sa_type=String(64))

    wgs84_lat: Optional[float] = None
    wgs84_lon: Optional[float] = None
    wgs84_accuracy: Optional[float] = None
    gcj02_lat: Optional[float] = None
    gcj02_lon: Optional[float] = None
    gcj02_applicable: bool = Field(default=False)

    # 高德 (主要供應商)
    address: Optional[str] = Field(default=None, sa_type=Text)
    country: Optional[str] = None
    province: Optional[str] = None
    city: Optional[str] = None
    district: Optional[str] = None
    street: Optional[str] = None
    adcode: Optional[str] = Field(default=None, sa_type=String(20))
    citycode: Optional[str] = Field(default=None, sa_type=String(20))

    baidu_address: Optional[str] = Field(default=None, sa_type=Text)
    baidu_country: Optional[str] = None
    baidu_province: Optional[str] = None
    baidu_city: Optional[str] = None
    baidu_district: Optional[str] = None
    baidu_street: Optional[str] = None
    baidu_adcode: Optional[str] = Field(default=None, sa_type=String(20))
    baidu_citycode: Optional[str] = Field(default=None, sa_type=String(20))

    tencent_address: Optional[str] = Field(default=None, sa_type=Text)
    tencent_country: Optional[str] = None
    tencent_province: Optional[str] = None
    tencent_city: Optional[str] = None
    tencent_district: Optional[str] = None
    tencent_street: Optional[str] = None
    tencent_street_number: Optional[str] = None
    tencent_adcode: Optional[str] = Field(default=None, sa_type=String(20))
    tencent_town: Optional[str] = None
    tencent_landmark_l1: Optional[str] = None
    tencent_landmark_l2: Optional[str] = None

    device_model: Optional[str] = None
    os_version: Optional[str] = None
    screen_w: Optional[int] = None
    screen_h: Optional[int] = None
    dpr: Optional[float] = None
    network_type: Optional[str] = None
    effective_type: Optional[str] = None
    ua: Optional[str] = Field(default=None, sa_type=Text)
    error: Optional[str] = Field(default=None, sa_type=Text)


class DeviceRecord(DeviceRecordBase, table=True):
    """設備資料表 device_data"""

    __tablename__ = "device_data"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=datetime.utcnow)
