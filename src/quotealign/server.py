import sys
import logging
import structlog

from mcp.server.fastmcp import FastMCP

# --- LOGGING CONFIGURATION ---
# All logs go to stderr. stdout carries the MCP JSON-RPC protocol.
logging.basicConfig(stream=sys.stderr, level=logging.INFO, force=True)

structlog.configure(
    processors=[
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer()
    ],
    logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
)
# -----------------------------

from quotealign import engine, quote

mcp = FastMCP("Quote Alignment Service")


@mcp.tool()
def align_quote(rich_text: str, selected_text: str) -> str:
    """
    Recovers the marked-up source (BBCode tags, markdown) for a piece of
    rendered text selected from a post.

    Returns the matching span of `rich_text`, extended so tags and markdown
    stay well-formed. If no clean span can be found, returns `selected_text`
    trimmed.
    Example: rich_text="say [b]hello world[/b]!", selected_text="hello world"
    returns "[b]hello world[/b]".
    """
    return engine.align_quote(rich_text, selected_text)


@mcp.tool()
def explain_alignment(rich_text: str, selected_text: str) -> dict:
    """
    Same as align_quote, but also reports whether alignment succeeded and,
    if not, why (EMPTY_FRAGMENT, NO_MATCH, UNBALANCED or ERROR).
    """
    return engine.align(rich_text, selected_text).model_dump(mode="json")


@mcp.tool()
def coerce_multi_line(quote_block: str) -> str:
    """
    Lays out a one-line quote block over several lines.
    Example: "[quote=a]hello[/quote]" -> "[quote=a]\\nhello\\n[/quote]"
    """
    return quote.coerce_multi_line(quote_block)


@mcp.tool()
def quote_to_partial(quote_block: str, selected_text: str) -> str:
    """
    Narrows a full [quote]...[/quote] block down to the selected part,
    keeping the original wrapper tag and its attributes.
    """
    try:
        return quote.quote_to_partial(quote_block, selected_text)
    except Exception as e:
        return f"Error building partial quote: {str(e)}"


def main():
    # Runs the server over stdio
    mcp.run()


if __name__ == "__main__":
    main()
