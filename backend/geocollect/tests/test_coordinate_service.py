"""
Datum conversion tests
"""

import pytest

from geocollect.domains.coordinates.models.coordinate_model import (
    CoordinateSystem,
    GeoCoordinate,
)
from geocollect.domains.coordinates.services.coordinate_service import (
    CoordinateService,
    gcj02_to_bd09,
    out_of_china,
    wgs84_to_gcj02,
)

# 北京參考點
BEIJING_WGS84 = (39.9087, 116.3975)
BEIJING_GCJ02 = (39.910103499, 116.403743573)
BEIJING_BD09 = (39.916442750, 116.410116586)


def test_wgs84_to_gcj02_matches_reference():
    result = wgs84_to_gcj02(*BEIJING_WGS84)

    assert result.applicable is True
    assert result.latitude == pytest.approx(BEIJING_GCJ02[0], abs=1e-5)
    assert result.longitude == pytest.approx(BEIJING_GCJ02[1], abs=1e-5)


def test_gcj02_to_bd09_matches_reference():
    gcj = wgs84_to_gcj02(*BEIJING_WGS84)
    result = gcj02_to_bd09(gcj.latitude, gcj.longitude)

    assert result.applicable is True
    assert result.latitude == pytest.approx(BEIJING_BD09[0], abs=1e-5)
    assert result.longitude == pytest.approx(BEIJING_BD09[1], abs=1e-5)


@pytest.mark.parametrize(
    "lat,lon",
    [
        (51.5074, -0.1278),  # 倫敦
        (40.7128, -74.0060),  # 紐約
        (-33.8688, 151.2093),  # 雪梨
        (56.0, 100.0),  # 緯度超出上界
        (30.0, 72.0),  # 經度低於下界
        (30.0, 137.9),  # 經度高於上界
        (0.5, 110.0),  # 緯度低於下界
    ],
)
def test_wgs84_to_gcj02_outside_region_returns_input(lat, lon):
    result = wgs84_to_gcj02(lat, lon)

    assert out_of_china(lat, lon)
    assert result.applicable is False
    assert result.latitude == lat
    assert result.longitude == lon


@pytest.mark.parametrize(
    "lat,lon", [(0.0, 0.0), (51.5074, -0.1278), (-89.9, 179.9), (39.9, 116.4)]
)
def test_gcj02_to_bd09_always_applicable(lat, lon):
    result = gcj02_to_bd09(lat, lon)

    assert result.applicable is True
    # BD09 偏移量級約為 0.006 度
    assert abs(result.latitude - lat) < 0.02
    assert abs(result.longitude - lon) < 0.02


def test_service_tags_converted_coordinates():
    service = CoordinateService()
    wgs = GeoCoordinate(
        system=CoordinateSystem.WGS84,
        latitude=BEIJING_WGS84[0],
        longitude=BEIJING_WGS84[1],
    )

    gcj = service.to_gcj02(wgs)
    bd = service.to_bd09(gcj)

    assert gcj.system == CoordinateSystem.GCJ02
    assert bd.system == CoordinateSystem.BD09
    assert bd.latitude == pytest.approx(BEIJING_BD09[0], abs=1e-5)
    # 原座標不被修改
    assert wgs.latitude == BEIJING_WGS84[0]


def test_service_keeps_wgs84_outside_region():
    service = CoordinateService()
    london = GeoCoordinate(system=CoordinateSystem.WGS84, latitude=51.5, longitude=-0.12)

    assert service.to_gcj02(london) == london


def test_service_rejects_wrong_input_system():
    service = CoordinateService()
    gcj = GeoCoordinate(system=CoordinateSystem.GCJ02, latitude=39.9, longitude=116.4)
    wgs = GeoCoordinate(system=CoordinateSystem.WGS84, latitude=39.9, longitude=116.4)

    with pytest.raises(ValueError):
        service.to_gcj02(gcj)
    with pytest.raises(ValueError):
        service.to_bd09(wgs)
