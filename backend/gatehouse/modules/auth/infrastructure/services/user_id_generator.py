"""
User Id Generator

User ids are version-5 UUIDs of the email inside a namespace derived from the
application code, so the same email always maps to the same id.
"""

import uuid

from gatehouse.core.domain.value_objects import Uuid
from gatehouse.modules.auth.domain.interfaces import IUserIdGenerator


class UserIdGenerator(IUserIdGenerator):
    def __init__(self, app_code: str):
        self.app_code = app_code
        self.namespace = uuid.uuid5(uuid.NAMESPACE_DNS, app_code)

    def generate_user_id(self, email: str) -> Uuid:
        return Uuid.from_name(self.namespace, email)
