"""
Models Module
=============

This module contains the scorers which turn a matrix of pairwise win counts into a score per item.

Included Scorers:
- ThurstoneCaseV: Thurstone's Law of Comparative Judgment, Case V. Probits of the empirical win probabilities are averaged per item, giving interval scaled scores centered on zero.
- WinCount: A baseline which scores items by their number of wins or their win rate.

Every scorer implements the PairwiseScorer interface from cjrank.core.base: fit() a win matrix, then rank() or print_leaderboard().
"""
