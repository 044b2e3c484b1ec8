from .prompts import CommandClassificationTemplate, PromptTemplate

__all__ = ["CommandClassificationTemplate", "PromptTemplate"]
