from pydantic import BaseModel

class ListTablesRequest(BaseModel):
    pass
