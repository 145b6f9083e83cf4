import signal


class CtrlCHandler:
    """
    Handle Ctrl+C so the polling loop can stop the vehicle and
    disconnect from the armband before exiting.
    """
    def __init__(self):
        self.should_stop = False
        self._previous = signal.signal(signal.SIGINT, self._signal_handler)

    def _signal_handler(self, sig, frame):
        """Callback executed when Ctrl+C is detected"""
        print("\n[INFO] Interrupt signal detected, stopping vehicle and closing cleanly...")
        self.should_stop = True

    def restore(self):
        """Reinstall the SIGINT handler that was active before this one."""
        if self._previous is not None:
            signal.signal(signal.SIGINT, self._previous)
            self._previous = None
