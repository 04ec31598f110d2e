"""
cjrank
======

Ranking of items from pairwise comparative judgments using Thurstone's Law of Comparative Judgment, Case V.
"""
from cjrank.core.base import RankedItem, RankedResult, PairwiseScorer
from cjrank.errors import CJRankError, DomainError, InsufficientItemsError, InvalidJudgmentError
from cjrank.models.baselines import WinCount
from cjrank.models.thurstone import ThurstoneCaseV, rank_items, thurstone_scores
from cjrank.scheduler import SchedulerState, initialize
from cjrank.session import RankingSession, SessionStats

__all__ = [
    'RankedItem',
    'RankedResult',
    'PairwiseScorer',
    'CJRankError',
    'DomainError',
    'InsufficientItemsError',
    'InvalidJudgmentError',
    'WinCount',
    'ThurstoneCaseV',
    'rank_items',
    'thurstone_scores',
    'SchedulerState',
    'initialize',
    'RankingSession',
    'SessionStats',
]
