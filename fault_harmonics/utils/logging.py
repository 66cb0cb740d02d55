from rich.console import Console

console = Console()

def info(msg: str) -> None:
    console.print(f"[bold cyan]INFO[/bold cyan] {msg}")

def warn(msg: str) -> None:
    console.print(f"[bold yellow]WARN[/bold yellow] {msg}")

def error(msg: str) -> None:
    console.print(f"[bold red]ERROR[/bold red] {msg}")

def progress(done: int, total: int) -> None:
    pct = 100.0 * done / total if total else 100.0
    console.print(f"[dim]  Processed {done}/{total} windows ({pct:.1f}%)[/dim]")
