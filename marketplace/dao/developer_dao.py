from marketplace.dao.base_dao import BaseDAO
from marketplace.models.developer import Developer


class DeveloperDAO(BaseDAO[Developer]):
    def __init__(self):
        super().__init__(Developer)


developer_dao = DeveloperDAO()
