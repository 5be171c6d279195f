from marketplace.dao.base_dao import BaseDAO
from marketplace.models.tag import Tag


class TagDAO(BaseDAO[Tag]):
    def __init__(self):
        super().__init__(Tag)


tag_dao = TagDAO()
