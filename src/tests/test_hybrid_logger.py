import io
import logging

from utils import HybridLogger


def test_class_column_and_level_filter(tmp_path):
    stream = io.StringIO()
    hybrid = HybridLogger("simon-log-test", log_dir=str(tmp_path), stream=stream)
    logger = hybrid.get_class_logger("RoundController", logging.INFO)

    logger.debug("hidden")
    logger.info("Round phase: IDLE → AWAITING_INPUT")
    hybrid.cleanup()

    output = stream.getvalue()
    assert "[INFO] [RoundController] Round phase: IDLE → AWAITING_INPUT" in output
    assert "hidden" not in output
    assert "\033[" not in output  # StringIO is not a TTY
    assert hybrid.log_file.read_text(encoding="utf-8") == output


def test_error_names_exception_type():
    stream = io.StringIO()
    hybrid = HybridLogger("simon-log-test-errors", log_dir=None, stream=stream)
    logger = hybrid.get_main_logger()

    try:
        raise ConnectionError("refused")
    except ConnectionError as e:
        logger.error("Could not load a new game", exception=e)
    hybrid.cleanup()

    output = stream.getvalue()
    assert "[ERROR] [Main] Could not load a new game | ConnectionError at" in output
    assert "Traceback" in output


def test_level_overrides_and_shared_instances():
    hybrid = HybridLogger("simon-log-test-levels", log_dir=None, console=False,
                          level_overrides={"StateClient": logging.DEBUG})

    assert hybrid.get_class_logger("StateClient", logging.WARNING).level == logging.DEBUG
    assert hybrid.get_class_logger("Board") is hybrid.get_class_logger("Board")
    child = hybrid.get_main_logger().create_class_logger("Input")
    assert child.class_name == "Input"
    assert child.level == logging.INFO
