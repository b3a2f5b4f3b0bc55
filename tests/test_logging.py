"""
Structured logging of embedding and matching operations.
"""

import base64
import logging

from util.logging import StructuredLogger, logger
from src.core.face_match_service import FaceMatchService
from src.vector.embeddings import DeterministicHashEmbedding
from src.vector.ranker import MatchRanker


def test_log_operation_format(caplog):
    test_logger = StructuredLogger("face_match_test")

    with caplog.at_level(logging.INFO, logger="face_match_test"):
        test_logger.log_operation("match.rank", "success", {"match_count": 2})

    assert "Operation: match.rank, Status: success, Details: {'match_count': 2}" in caplog.text


def test_failed_operations_log_as_warning(caplog):
    test_logger = StructuredLogger("face_match_test")

    with caplog.at_level(logging.INFO, logger="face_match_test"):
        test_logger.log_embedding_operation("query", "data:image/png;base64 (8 chars)", status="failed")

    assert caplog.records[-1].levelno == logging.WARNING
    assert "embedding.query" in caplog.text


def test_handler_not_duplicated():
    first = StructuredLogger("face_match_dup")
    second = StructuredLogger("face_match_dup")

    assert first.logger is second.logger
    assert len(second.logger.handlers) == 1


def test_rank_logs_summary(caplog):
    ranker = MatchRanker()

    with caplog.at_level(logging.DEBUG, logger=logger.logger.name):
        ranker.rank([1.0, 0.0], [])

    assert "match.rank" in caplog.text
    assert "'candidate_count': 0" in caplog.text
    assert caplog.records[-1].levelno == logging.DEBUG


def test_rank_summary_hidden_at_info(caplog):
    """Per-query ranking summaries stay out of the log unless debug is on."""
    ranker = MatchRanker()

    with caplog.at_level(logging.INFO, logger=logger.logger.name):
        ranker.rank([1.0, 0.0], [])

    assert "match.rank" not in caplog.text


def test_embedding_logs_never_contain_payload(caplog):
    encoded = base64.b64encode(b"private photo of a survivor").decode("ascii")
    service = FaceMatchService(DeterministicHashEmbedding(dimension=8), MatchRanker())

    with caplog.at_level(logging.INFO, logger=logger.logger.name):
        embedding = service.extract_face_embedding("data:image/png;base64," + encoded)

    assert "embedding.extract" in caplog.text
    assert encoded not in caplog.text
    assert str(embedding[0]) not in caplog.text


def test_set_debug():
    test_logger = StructuredLogger("face_match_debug")

    test_logger.set_debug(True)
    assert test_logger.logger.level == logging.DEBUG
    test_logger.set_debug(False)
    assert test_logger.logger.level == logging.INFO


def test_logger_surface():
    """Operations log through log_operation; only warning and set_debug are exposed directly."""
    assert hasattr(logger, "warning")
    assert not hasattr(logger, "info")
    assert not hasattr(logger, "error")
    assert not hasattr(logger, "debug")
