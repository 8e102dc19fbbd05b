"""Phase skip flags."""

from pydantic import BaseModel


class PhasesConfig(BaseModel, frozen=True):
    skip_ingest: bool = False
    skip_search: bool = False
    skip_evaluate: bool = False
