from typing import List

from pydantic import BaseModel, Field


class CommandBatch(BaseModel):
    commands: List[str] = Field(default_factory=list)


class CommandReport(BaseModel):
    output: str
    results: List[str]

    @classmethod
    def from_results(cls, results: List[str]) -> "CommandReport":
        return cls(
            output="".join(f"{result}\n" for result in results),
            results=results,
        )
