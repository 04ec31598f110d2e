"""module for measuring how well a set of scores recovers a known ranking"""

import numpy as np
from scipy.stats import kendalltau, spearmanr


def kendall_tau(scores: np.ndarray, truth: np.ndarray) -> float:
    """kendall's tau-b between estimated scores and true strengths"""
    return float(kendalltau(scores, truth)[0])


def spearman_rho(scores: np.ndarray, truth: np.ndarray) -> float:
    """spearman rank correlation between estimated scores and true strengths"""
    return float(spearmanr(scores, truth)[0])


def top_k_overlap(scores: np.ndarray, truth: np.ndarray, k: int) -> float:
    """fraction of the true top k items which are also in the estimated top k"""
    k = min(k, len(truth))
    est_top = set(np.argsort(-np.asarray(scores), kind='stable')[:k].tolist())
    true_top = set(np.argsort(-np.asarray(truth), kind='stable')[:k].tolist())
    return len(est_top & true_top) / k


def ranking_metrics_suite(scores: np.ndarray, truth: np.ndarray, k: int = 3):
    """a wrapper for running a bunch of ranking metrics"""
    metrics = {
        'kendall_tau': kendall_tau(scores, truth),
        'spearman_rho': spearman_rho(scores, truth),
        f'top_{k}_overlap': top_k_overlap(scores, truth, k),
    }
    return metrics
