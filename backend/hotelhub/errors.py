"""
组合写入异常体系
每个异常带机器可读的 kind、HTTP 状态码、可读消息和结构化明细
"""
from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    """错误类别"""
    INVALID_FIELD_TYPE = "INVALID_FIELD_TYPE"
    INVALID_BATCH_SHAPE = "INVALID_BATCH_SHAPE"
    MISSING_DISCRIMINATOR = "MISSING_DISCRIMINATOR"
    PARENT_NOT_FOUND = "PARENT_NOT_FOUND"
    NO_VALID_FIELDS = "NO_VALID_FIELDS"
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"
    UNIQUE_CONFLICT = "UNIQUE_CONFLICT"
    STORAGE_FAILURE = "STORAGE_FAILURE"


class CompositionError(Exception):
    """组合写入异常基类"""

    kind: ErrorKind = ErrorKind.STORAGE_FAILURE
    status_code: int = 500

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = {k: v for k, v in details.items() if v is not None}

    def to_dict(self) -> Dict[str, Any]:
        """转为响应体"""
        body = {
            "success": False,
            "error": self.message,
            "kind": self.kind.value,
        }
        body.update(self.details)
        return body


class InvalidFieldType(CompositionError):
    """字段值无法转换为声明类型"""
    kind = ErrorKind.INVALID_FIELD_TYPE
    status_code = 400

    def __init__(self, field: str, expected: str, value: Any, index: Optional[int] = None):
        where = f" (item {index})" if index is not None else ""
        super().__init__(
            f"Field '{field}'{where} expects {expected}, got {value!r}.",
            field=field, expected=expected, index=index,
        )
        self.field = field
        self.index = index


class InvalidBatchShape(CompositionError):
    kind = ErrorKind.INVALID_BATCH_SHAPE
    status_code = 400

    def __init__(self, entity_label: str):
        super().__init__(f"Request body must be a non-empty array of {entity_label}.")


class MissingDiscriminator(CompositionError):
    """批量条目缺少判别字段"""
    kind = ErrorKind.MISSING_DISCRIMINATOR
    status_code = 400

    def __init__(self, entity_label: str, discriminator: str, index: int, item: Any = None):
        super().__init__(
            f"Each {entity_label} object must contain at least a {discriminator}.",
            field=discriminator, index=index, offendingItem=item,
        )
        self.index = index


class ParentNotFound(CompositionError):
    kind = ErrorKind.PARENT_NOT_FOUND
    status_code = 404

    def __init__(self, entity_kind: str, parent_id: Any):
        super().__init__(
            f"{entity_kind} with ID {parent_id} not found.",
            entity=entity_kind, parent_id=parent_id,
        )
        self.entity_kind = entity_kind
        self.parent_id = parent_id


class NoValidFields(CompositionError):
    kind = ErrorKind.NO_VALID_FIELDS
    status_code = 400

    def __init__(self, message: str = "No valid fields provided."):
        super().__init__(message)


class MissingRequiredField(CompositionError):
    kind = ErrorKind.MISSING_REQUIRED_FIELD
    status_code = 400

    def __init__(self, field: str, message: Optional[str] = None):
        super().__init__(message or f"{field} is required.", field=field)
        self.field = field


class UniqueConflict(CompositionError):
    """唯一约束冲突，且重试为更新后仍失败"""
    kind = ErrorKind.UNIQUE_CONFLICT
    status_code = 409

    def __init__(self, table: str, parent_id: Any):
        super().__init__(
            f"Concurrent write conflict on {table} for parent {parent_id}.",
            table=table, parent_id=parent_id,
        )


class StorageFailure(CompositionError):
    kind = ErrorKind.STORAGE_FAILURE
    status_code = 500

    def __init__(self, table: str, reason: str):
        super().__init__(f"Storage failure on {table}: {reason}", table=table)
