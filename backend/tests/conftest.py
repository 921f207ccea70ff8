"""
Pytest 配置和共享 fixtures
"""
import os

# 应用启动时的 init_db 不落盘
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from hotelhub.database import Base, get_db
from hotelhub.models import entities  # noqa
from hotelhub.models.entities import Hotel, Room, Event, EquipmentType
from hotelhub.main import app


@pytest.fixture(scope="function")
def db_engine():
    """创建内存数据库引擎"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """创建数据库会话"""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture(scope="function")
def client(db_session):
    """创建测试客户端"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ============== 数据 Fixtures ==============

@pytest.fixture
def sample_hotel(db_session):
    """创建测试酒店"""
    hotel = Hotel(name="Hotel Seeblick", city="Konstanz", country="DE", star_rating=4)
    db_session.add(hotel)
    db_session.commit()
    db_session.refresh(hotel)
    return hotel


@pytest.fixture
def sample_room(db_session, sample_hotel):
    """创建测试房间配置"""
    room = Room(hotel_id=sample_hotel.id, main_contact_name="Anna Berger")
    db_session.add(room)
    db_session.commit()
    db_session.refresh(room)
    return room


@pytest.fixture
def sample_event(db_session, sample_hotel):
    """创建测试活动"""
    event = Event(hotel_id=sample_hotel.id, contact_name="Jonas Keller")
    db_session.add(event)
    db_session.commit()
    db_session.refresh(event)
    return event


@pytest.fixture
def equipment_types(db_session):
    """设备类型查找表：名称 -> ID"""
    types = [
        EquipmentType(equipment_name="Flipchart"),
        EquipmentType(equipment_name="Beamer", description="Full HD"),
    ]
    db_session.add_all(types)
    db_session.commit()
    return {t.equipment_name: t.id for t in types}
