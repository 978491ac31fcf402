"""Market commands for MarketLens CLI.

Displays quotes, Fibonacci levels and moving averages for a symbol, and
a trend overview of the configured watch-list.
"""

import asyncio

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from marketlens.timeframes import DEFAULT_INTERVAL, DEFAULT_RANGE, Interval, Range

console = Console()

VALID_RANGES = [r.value for r in Range]
VALID_INTERVALS = [i.value for i in Interval]


def _get_service():
    """Build the market service from configuration."""
    from marketlens.config import get_settings
    from marketlens.providers import YahooChartProvider
    from marketlens.service import MarketService

    settings = get_settings()
    return MarketService(
        YahooChartProvider(settings.provider),
        watchlist=settings.markets.watchlist,
    )


def _error_panel(message: str, title: str = "Error") -> None:
    console.print(Panel(
        message,
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))


def _fmt(value: float | None) -> str:
    return f"{value:,.2f}" if value is not None else "N/A"


@click.command()
@click.argument("symbol")
def quote(symbol: str) -> None:
    """Display the current quote for a symbol.

    SYMBOL is the ticker symbol (e.g., SPY, QQQ, GLD).

    \b
    Examples:
      marketlens quote SPY
      marketlens quote tlt
    """
    from marketlens.providers import ProviderError, SymbolNotFoundError

    symbol = symbol.upper()
    service = _get_service()

    try:
        q = service.provider.get_quote(symbol)
    except SymbolNotFoundError:
        _error_panel(f"[red]Symbol not found:[/red] {symbol}")
        raise SystemExit(1)
    except ProviderError as e:
        _error_panel(f"[red]Failed to get quote:[/red]\n\n{e}")
        raise SystemExit(1)

    if q.change >= 0:
        change_color = "green"
        arrow = "▲"
    else:
        change_color = "red"
        arrow = "▼"

    quote_text = (
        f"[bold]{q.symbol}[/bold] [dim]{q.name}[/dim]\n\n"
        f"[bold white]Price:[/bold white] ${q.price:,.2f}\n"
        f"[bold white]Change:[/bold white] [{change_color}]{arrow} {q.change:+.2f} "
        f"({q.change_percent:+.2f}%)[/{change_color}]\n\n"
        f"[dim]Open:[/dim]       ${q.open:,.2f}\n"
        f"[dim]High:[/dim]       ${q.high:,.2f}\n"
        f"[dim]Low:[/dim]        ${q.low:,.2f}\n"
        f"[dim]Prev close:[/dim] ${q.prev_close:,.2f}\n"
        f"[dim]52w range:[/dim]  ${q.fifty_two_week_low:,.2f} - ${q.fifty_two_week_high:,.2f}\n"
        f"[dim]Volume:[/dim]     {q.volume:,.0f}"
    )

    console.print(Panel(
        quote_text,
        title=f"[bold {change_color}]Quote[/bold {change_color}]",
        border_style=change_color,
    ))


@click.command()
@click.argument("symbol")
@click.option(
    "-r", "--range", "range_",
    default=DEFAULT_RANGE.value,
    type=click.Choice(VALID_RANGES),
    help=f"History range (default: {DEFAULT_RANGE.value})",
)
@click.option(
    "-i", "--interval",
    default=DEFAULT_INTERVAL.value,
    type=click.Choice(VALID_INTERVALS),
    help=f"Candle interval (default: {DEFAULT_INTERVAL.value})",
)
def analyze(symbol: str, range_: str, interval: str) -> None:
    """Show Fibonacci levels and moving averages for a symbol.

    SYMBOL is the ticker symbol (e.g., SPY, QQQ, GLD).

    \b
    Examples:
      marketlens analyze SPY                  # 3 months of daily candles
      marketlens analyze QQQ -r 1mo -i 4h     # 4-hour candles
      marketlens analyze GLD -r 5y -i 1w      # Weekly candles
    """
    from marketlens.providers import ProviderError, SymbolNotFoundError

    symbol = symbol.upper()
    console.print(f"[dim]Analyzing {symbol} ({range_}, {interval} candles)...[/dim]")

    try:
        report = asyncio.run(_get_service().get_symbol_report(symbol, range_, interval))
    except SymbolNotFoundError:
        _error_panel(f"[red]Symbol not found:[/red] {symbol}")
        raise SystemExit(1)
    except ProviderError as e:
        _error_panel(f"[red]Failed to fetch market data:[/red]\n\n{e}")
        raise SystemExit(1)

    fib = report.fibonacci
    if not fib.retracements:
        console.print(Panel(
            f"[yellow]Only {len(report.candles)} candles available for {symbol}[/yellow]\n\n"
            "[dim]At least 20 candles are needed for Fibonacci levels. "
            "Try a longer range.[/dim]",
            title="[bold yellow]Insufficient Data[/bold yellow]",
            border_style="yellow",
        ))
    else:
        trend_color = "green" if fib.trend == "up" else "red"
        console.print(
            f"[bold]{symbol}[/bold] ${report.quote.price:,.2f}  "
            f"[{trend_color}]{fib.trend.upper()} trend[/{trend_color}]  "
            f"[dim]high {_fmt(fib.high)} ({fib.swing_high_date}) / "
            f"low {_fmt(fib.low)} ({fib.swing_low_date})[/dim]"
        )

        table = Table(title="Fibonacci Levels", show_header=True, header_style="bold cyan")
        table.add_column("Type", style="dim")
        table.add_column("Level", justify="right")
        table.add_column("Price", justify="right")

        for level in fib.retracements:
            table.add_row("Retracement", level.level, _fmt(level.price))
        for level in fib.extensions:
            table.add_row("Extension", level.level, f"[green]{_fmt(level.price)}[/green]")

        console.print(table)

    ma_table = Table(title="Moving Averages", show_header=True, header_style="bold cyan")
    ma_table.add_column("Period", style="dim")
    ma_table.add_column("SMA", justify="right")
    ma_table.add_column("Price vs SMA", justify="right")

    last_close = report.candles[-1].close if report.candles else None
    for name, ma in report.moving_averages.items():
        if ma.latest is None or last_close is None:
            position = "[dim]-[/dim]"
        elif last_close >= ma.latest:
            position = "[green]Above[/green]"
        else:
            position = "[red]Below[/red]"
        ma_table.add_row(name.upper(), _fmt(ma.latest), position)

    console.print(ma_table)
    console.print(f"[dim]Based on {len(report.candles)} candles[/dim]")


@click.command()
def overview() -> None:
    """Show quotes and Fibonacci trend for every watch-list symbol.

    \b
    Examples:
      marketlens overview
    """
    service = _get_service()
    console.print(f"[dim]Fetching {len(service.watchlist)} symbols...[/dim]")

    result = asyncio.run(service.get_overview())

    if not result.symbols:
        _error_panel("[red]No market data could be fetched.[/red]")
        raise SystemExit(1)

    table = Table(title="Market Overview", show_header=True, header_style="bold cyan")
    table.add_column("Symbol", style="bold")
    table.add_column("Name", style="dim")
    table.add_column("Price", justify="right")
    table.add_column("Change %", justify="right")
    table.add_column("Trend", justify="center")
    table.add_column("Fib High", justify="right", style="green")
    table.add_column("Fib Low", justify="right", style="red")

    for entry in result.symbols:
        change_color = "green" if entry.change >= 0 else "red"
        if entry.fibonacci.retracements:
            trend_color = "green" if entry.fibonacci.trend == "up" else "red"
            trend = f"[{trend_color}]{entry.fibonacci.trend}[/{trend_color}]"
        else:
            trend = "[dim]-[/dim]"

        table.add_row(
            entry.symbol,
            entry.name,
            _fmt(entry.price),
            f"[{change_color}]{entry.change_percent:+.2f}%[/{change_color}]",
            trend,
            _fmt(entry.fibonacci.high),
            _fmt(entry.fibonacci.low),
        )

    console.print(table)

    missing = len(service.watchlist) - len(result.symbols)
    if missing:
        console.print(f"[dim]{missing} symbol(s) could not be fetched[/dim]")
