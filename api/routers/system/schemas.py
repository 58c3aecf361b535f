from pydantic import BaseModel


class ProbeStatus(BaseModel):
    ok: bool
