"""Blockchain explorer (Ethplorer getTxInfo) response payload."""
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TransactionOperation(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    timestamp: int = 0
    transaction_hash: str = ""
    type: str = ""
    from_address: str | None = Field("", alias="from")
    to_address: str | None = Field("", alias="to")
    value: float | str = 0


class TransactionInfo(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    hash: str = ""
    timestamp: int = 0
    block_number: int = 0
    confirmations: int = 0
    success: bool
    # null "to" on contract creation
    from_address: str | None = Field("", alias="from")
    to_address: str | None = Field("", alias="to")
    value: float = 0
    input: str = ""
    gas_limit: int = 0
    gas_used: int = 0
    operations: list[TransactionOperation] = Field(default_factory=list)
