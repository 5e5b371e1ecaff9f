import logging

from core.utils import logging_utils


def test_log_performance_decorator_runs():
    @logging_utils.log_performance(threshold_ms=0.01)
    def fast_func():
        return 42
    assert fast_func() == 42


def test_log_performance_reports_slow_calls(caplog, settings):
    settings.SURVEY_API_SLOW_MS = -1

    @logging_utils.log_performance()
    def slow_func():
        return 1

    with caplog.at_level(logging.WARNING, logger='core.performance'):
        slow_func()
    assert 'Slow operation' in caplog.text


def test_log_user_action_runs(caplog):
    with caplog.at_level(logging.INFO, logger='core.security'):
        logging_utils.log_user_action("delete_survey", True, admin_id='a1', survey_id='s1')
    assert 'Admin action: delete_survey - SUCCESS | admin_id=a1, survey_id=s1' in caplog.text


def test_log_security_event_runs():
    result = logging_utils.log_security_event("LOGIN_FAILED", severity="INFO", username='root')
    assert result is None


def test_structured_logger_methods():
    logger = logging_utils.StructuredLogger("test")
    logger.debug("debug", foo=1)
    logger.info("info", bar=2)
    logger.warning("warn", baz=3)
    logger.error("error", qux=4)
    logger.critical("critical", quux=5)
    logger.exception("exception", corge=6)
    assert logger._format_message("msg", a=1) == "msg | a=1"
