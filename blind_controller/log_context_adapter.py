import logging


class LogContextAdapter(logging.LoggerAdapter):
    def __init__(self, logger, extra=None):
        super().__init__(logger, extra or {})
        self.channel = None

    def set_channel(self, channel):
        self.channel = channel

    def for_channel(self, channel):
        adapter = LogContextAdapter(self.logger, self.extra)
        adapter.set_channel(channel)
        return adapter

    def process(self, msg, kwargs):
        if self.channel is not None:
            return f"[channel {self.channel}] {msg}", kwargs
        return f"[dispatcher] {msg}", kwargs
