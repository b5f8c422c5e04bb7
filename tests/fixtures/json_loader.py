import copy
import json
from pathlib import Path
from typing import Any, Dict, List


class TestDataLoader:
    """Seed accounts and sample values shared by the integration tests"""

    __test__ = False
    _data: Dict[str, Any] = None

    @classmethod
    def load(cls) -> Dict[str, Any]:
        if cls._data is None:
            with open(Path(__file__).parent / "test_data.json") as f:
                cls._data = json.load(f)
        return cls._data

    @classmethod
    def get_copy(cls, key: str) -> Any:
        return copy.deepcopy(cls.load().get(key))

    @classmethod
    def users(cls) -> List[Dict[str, Any]]:
        return cls.get_copy("users")

    @classmethod
    def user(cls, username: str) -> Dict[str, Any]:
        for user in cls.users():
            if user["username"] == username:
                return user
        raise KeyError(username)
