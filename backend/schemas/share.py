# backend/schemas/share.py
from schemas.base import ORMBase
from schemas.like import TargetRef


class ShareRequest(TargetRef):
    pass


class ShareResponse(ORMBase):
    share_url: str
