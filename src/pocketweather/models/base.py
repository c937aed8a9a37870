from pydantic import BaseModel, ConfigDict


class FrozenModel(BaseModel):
    """Base model for values that are replaced whole, never patched.

    Snapshots, forecast samples and screen states are rebuilt on every
    fetch cycle, so instances reject attribute assignment.
    """

    model_config = ConfigDict(frozen=True)
