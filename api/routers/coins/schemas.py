from pydantic import BaseModel, ConfigDict, StrictInt
from pydantic.alias_generators import to_camel


class SendCoinRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    to_user: str
    # "10", true и 10.0 - неверное тело запроса, а не 10 монет
    amount: StrictInt
