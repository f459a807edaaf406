"""Shared utilities for cmdtrace."""

from utils.env_utils import env_bool, env_list, env_text, env_value
from utils.uuid_factory import uuid7_str

__all__ = ["env_bool", "env_list", "env_text", "env_value", "uuid7_str"]
