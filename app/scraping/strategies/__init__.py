"""
Extraction strategy exports.
"""

from app.scraping.strategies.ctftime_strategy import CTFTimeEventListStrategy
from app.scraping.strategies.keyword_strategy import KeywordPageStrategy

__all__ = ["CTFTimeEventListStrategy", "KeywordPageStrategy"]
