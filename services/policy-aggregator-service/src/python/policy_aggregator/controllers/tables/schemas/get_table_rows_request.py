from pydantic import BaseModel

class GetTableRowsRequest(BaseModel):
    table_name: str
