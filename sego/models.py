"""
Pydantic models for sego API responses.

Usage:
    from sego.models import SegmentationResult

    tokens = segmenter.segment_tokens("我们去北京大学")
    result = SegmentationResult.from_tokens("我们去北京大学", tokens)
    print(result.model_dump_json())
"""

from typing import List, Sequence

from pydantic import BaseModel, Field

from sego.dictionary import Dictionary
from sego.token import Token


class TokenResult(BaseModel):
    """A single segmented word."""
    text: str = Field(..., description="Word text")
    units: List[str] = Field(default_factory=list, description="Atomic units of the word")
    frequency: int = Field(0, description="Dictionary frequency (1 for unknown words)")
    cost: float = Field(0.0, description="Path cost, -log2 of the word probability")
    pos: str = Field("", description="Dictionary tag ('x' for unknown words)")

    # Position info, in units
    start: int = Field(0, description="Index of the first unit in the input")
    end: int = Field(0, description="Index after the last unit in the input")

    known: bool = Field(True, description="False for pseudo-tokens not in the dictionary")

    @classmethod
    def from_token(cls, token: Token, start: int, joint: str = "") -> "TokenResult":
        return cls(
            text=token.render(joint),
            units=list(token.units),
            frequency=token.frequency,
            cost=token.cost,
            pos=token.pos,
            start=start,
            end=start + len(token),
            known=token.known,
        )


class SegmentationResult(BaseModel):
    """
    Segmentation of one input text.

    Example response:
        {
            "text": "去北京大学",
            "tokens": [
                {"text": "去", "units": ["去"], "frequency": 10, "cost": 2.0, "pos": "v",
                 "start": 0, "end": 1, "known": true},
                {"text": "北京大学", "units": ["北", "京", "大", "学"], ...}
            ],
            "cost": 4.0
        }
    """
    text: str = Field(..., description="Input text")
    tokens: List[TokenResult] = Field(..., description="Words in order")
    cost: float = Field(0.0, description="Total path cost")

    @classmethod
    def from_tokens(cls, text: str, tokens: Sequence[Token], joint: str = "") -> "SegmentationResult":
        """
        Create a SegmentationResult from Segmenter.segment_tokens() output.

        Args:
            text: The segmented text.
            tokens: Tokens covering the text.
            joint: Joiner for units inside phrase words.
        """
        results = []
        start = 0
        for token in tokens:
            results.append(TokenResult.from_token(token, start, joint))
            start += len(token)
        return cls(
            text=text,
            tokens=results,
            cost=sum(t.cost for t in tokens),
        )

    def words(self) -> List[str]:
        """Just the word texts."""
        return [t.text for t in self.tokens]


class DictionaryInfo(BaseModel):
    """Summary statistics of a loaded dictionary."""
    num_tokens: int = Field(..., description="Number of distinct words")
    max_token_length: int = Field(..., description="Units in the longest word")
    total_frequency: int = Field(..., description="Sum of all word frequencies")

    @classmethod
    def from_dictionary(cls, dictionary: Dictionary) -> "DictionaryInfo":
        return cls(
            num_tokens=dictionary.num_tokens,
            max_token_length=dictionary.max_token_length,
            total_frequency=dictionary.total_frequency,
        )
