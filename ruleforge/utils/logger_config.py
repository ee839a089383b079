import logging


class EmojiFormatter(logging.Formatter):
    """
    A log formatter that prefixes each message with an emoji for its level.
    """

    LEVEL_EMOJIS = {
        logging.DEBUG: "🐛",
        logging.INFO: "✅",
        logging.WARNING: "⚠️",
        logging.ERROR: "❌",
        logging.CRITICAL: "🔥",
    }

    def format(self, record):
        s = super().format(record)
        emoji = self.LEVEL_EMOJIS.get(record.levelno, "")
        return f"{emoji} {s}"


def setup_logging(level: int | str = logging.INFO):
    """
    Configure the root logger with a console handler using EmojiFormatter.

    Call from the application's entry point. A handler installed by an
    earlier call is replaced, so repeated calls do not duplicate output;
    handlers installed by anything else are left in place.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(
        EmojiFormatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )

    for handler in list(root_logger.handlers):
        if isinstance(handler.formatter, EmojiFormatter):
            root_logger.removeHandler(handler)

    root_logger.addHandler(console_handler)
