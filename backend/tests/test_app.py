"""
应用入口与异常处理测试
"""
from fastapi.testclient import TestClient

from hotelhub.errors import ErrorKind, StorageFailure, UniqueConflict


class TestApp:
    def test_root(self, client: TestClient):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["name"] == "HotelHub Onboarding"

    def test_health(self, client: TestClient):
        assert client.get("/health").json() == {"status": "healthy"}


class TestErrorEnvelope:
    """异常 -> 响应体"""

    def test_to_dict_skips_empty_details(self):
        body = StorageFailure("hotels", "disk full").to_dict()
        assert body == {
            "success": False,
            "error": "Storage failure on hotels: disk full",
            "kind": "STORAGE_FAILURE",
            "table": "hotels",
        }

    def test_status_codes(self):
        assert StorageFailure("t", "x").status_code == 500
        assert UniqueConflict("t", 1).status_code == 409
        assert UniqueConflict("t", 1).kind == ErrorKind.UNIQUE_CONFLICT
