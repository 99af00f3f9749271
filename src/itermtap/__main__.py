"""Command line entry point for itermtap.

`itermtap --mcp` serves write_to_terminal, read_terminal_output,
send_control_character and ls over MCP stdio for an agent. Plain `itermtap`
opens the same commands in a ReplKit2 REPL, handy for trying a session by hand
before wiring up a client.

Timing and defaults come from the nearest itermtap.toml. Log lines go to
stderr so they never mix with the MCP stream on stdout.
"""

import logging
import sys

from .app import app

logger = logging.getLogger("itermtap")


def main():
    """Start the MCP server with --mcp, the REPL otherwise."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )

    if "--mcp" in sys.argv:
        logger.info("Serving iTerm2 session tools over MCP")
        app.mcp.run()
    else:
        app.run(title="itermtap - iTerm2 Session Driver")


if __name__ == "__main__":
    main()
