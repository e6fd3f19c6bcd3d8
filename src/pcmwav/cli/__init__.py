from pcmwav.cli.commands import app

__all__ = ["app"]
