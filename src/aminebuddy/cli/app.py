"""Main CLI application using Typer."""
import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..agent import AgentOverrides, create_portfolio_agent
from ..config import Settings, load_settings
from ..errors import BuddyError
from ..knowledge import IndexConfig, load_documents
from ..logging_setup import configure_logging, configure_tui_logging
from ..suggestions import PageSuggestion, suggest_pages
from .providers import get_pipeline, get_store, get_transport

# Create Typer app
app = typer.Typer(
    name="aminebuddy",
    help="Portfolio assistant: knowledge base ingestion, RAG answers and chat widget",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()


@app.callback()
def main_callback(
    ctx: typer.Context,
    env_file: Path | None = typer.Option(
        None,
        "--env-file",
        exists=True,
        dir_okay=False,
        help="Environment file to load (default: .env.local, then .env)"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Override LOG_LEVEL"
    )
):
    """Load settings once for every command."""
    try:
        settings = load_settings(env_file)
    except BuddyError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    if log_level:
        settings = settings.model_copy(update={"log_level": log_level.upper()})
    ctx.obj = settings


def _settings(ctx: typer.Context) -> Settings:
    settings = ctx.obj
    if not isinstance(settings, Settings):
        settings = load_settings()
    configure_logging(settings.log_level, console=Console(stderr=True))
    return settings


def _print_pages(pages: list[PageSuggestion]) -> None:
    table = Table(show_header=True, header_style="bold cyan", title="Suggested pages")
    table.add_column("Page", style="cyan")
    table.add_column("Path", style="green")
    table.add_column("Description", style="dim")
    for page in pages:
        table.add_row(page.title, page.href, page.description or "")
    console.print(table)


@app.command()
def init(
    ctx: typer.Context,
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Force re-initialization (WARNING: destroys existing data)"
    )
):
    """Initialize the knowledge base schema with pgvector."""
    settings = _settings(ctx)

    async def _init():
        store = get_store(settings)
        try:
            await store.connect()

            if force:
                console.print("[yellow]WARNING: Force re-initialization will destroy existing data![/yellow]")
                confirm = typer.confirm("Are you sure you want to continue?")
                if not confirm:
                    console.print("[dim]Aborted.[/dim]")
                    return
                await store.drop_schema()

            console.print("[dim]Initializing database...[/dim]")
            await store.initialize_schema(IndexConfig())

            console.print("[green]Database initialized successfully![/green]")
            console.print("[dim]You can now add documents with: aminebuddy ingest <path>[/dim]")

        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            await store.disconnect()

    asyncio.run(_init())


@app.command()
def ingest(
    ctx: typer.Context,
    paths: list[Path] = typer.Argument(
        ...,
        exists=True,
        help="Markdown or text files, or directories containing them"
    ),
    chunk_size: int = typer.Option(1000, "--chunk-size", "-s", help="Maximum characters per chunk"),
    chunk_overlap: int = typer.Option(200, "--chunk-overlap", "-o", help="Characters shared by consecutive chunks"),
    namespace: str | None = typer.Option(None, "--namespace", "-n", help="Knowledge base namespace")
):
    """Add documents about Amine to the knowledge base."""
    settings = _settings(ctx)

    async def _ingest():
        documents = load_documents(paths)
        if not documents:
            console.print("[yellow]No .md or .txt documents found.[/yellow]")
            return

        pipeline, store, embedder = get_pipeline(settings, console)
        try:
            await store.connect()
            console.print(f"[dim]Ingesting {len(documents)} document(s)...[/dim]")
            result = await pipeline.insert_documents(
                documents,
                chunk_size=chunk_size,
                chunk_overlap=chunk_overlap,
                namespace=namespace or settings.retrieval.namespace
            )
            console.print(
                f"[green]Inserted {result.chunks_inserted} chunks "
                f"from {result.documents_processed} document(s)[/green]"
            )
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            await store.disconnect()
            await embedder.close()

    asyncio.run(_ingest())


@app.command("ingest-text")
def ingest_text(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Text to add"),
    source: str = typer.Option("cli", "--source", help="Source recorded in the passage metadata"),
    namespace: str | None = typer.Option(None, "--namespace", "-n", help="Knowledge base namespace")
):
    """Add a single piece of text to the knowledge base."""
    settings = _settings(ctx)

    async def _ingest_text():
        pipeline, store, embedder = get_pipeline(settings, console)
        try:
            await store.connect()
            result = await pipeline.insert_text(
                text,
                metadata={"source": source},
                namespace=namespace or settings.retrieval.namespace
            )
            console.print(f"[green]Inserted {result.chunks_inserted} chunk(s)[/green]")
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            await store.disconnect()
            await embedder.close()

    asyncio.run(_ingest_text())


@app.command()
def stats(ctx: typer.Context):
    """Show knowledge base statistics."""
    settings = _settings(ctx)

    async def _stats():
        store = get_store(settings)
        try:
            await store.connect()
            stats = await store.get_stats()

            table = Table(show_header=False, box=None)
            table.add_column("Metric", style="bold cyan", width=15)
            table.add_column("Value")

            table.add_row("Total Chunks", str(stats.total_passages))
            table.add_row("Total Size", f"{stats.total_size_bytes / (1024 * 1024):.2f} MB")
            namespaces = ", ".join(f"{k}: {v}" for k, v in stats.namespaces.items())
            table.add_row("Namespaces", namespaces or "None")
            table.add_row("Last Ingested", str(stats.last_ingested or "Never"))

            console.print(table)
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            await store.disconnect()

    asyncio.run(_stats())


@app.command()
def health(ctx: typer.Context):
    """Check database connection and credentials."""
    settings = _settings(ctx)

    async def _health():
        all_healthy = True

        store = get_store(settings)
        try:
            await store.connect()
            if await store.health_check():
                console.print("[green]+[/green] Database connection: OK")
            else:
                console.print("[red]x[/red] Database connection: FAILED")
                all_healthy = False
        except Exception as e:
            console.print(f"[red]x[/red] Database connection: FAILED ({e})")
            all_healthy = False
        finally:
            await store.disconnect()

        if settings.model.openai_api_key:
            console.print("[green]+[/green] OpenAI API key: SET")
        else:
            console.print("[red]x[/red] OpenAI API key: NOT SET (required for embeddings)")
            all_healthy = False

        if settings.model.provider.lower() in ("anthropic", "claude"):
            if settings.model.anthropic_api_key:
                console.print("[green]+[/green] Anthropic API key: SET")
            else:
                console.print("[red]x[/red] Anthropic API key: NOT SET")
                all_healthy = False

        if not all_healthy:
            raise typer.Exit(code=1)

    asyncio.run(_health())


@app.command()
def clear(
    ctx: typer.Context,
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Skip confirmation prompt"
    ),
    namespace: str | None = typer.Option(None, "--namespace", "-n", help="Only clear this namespace")
):
    """Delete passages from the knowledge base."""
    settings = _settings(ctx)

    async def _clear():
        if not yes:
            console.print("[yellow]WARNING: This will delete knowledge base passages![/yellow]")
            confirm = typer.confirm("Are you sure you want to continue?")
            if not confirm:
                console.print("[dim]Aborted.[/dim]")
                return

        store = get_store(settings)
        try:
            await store.connect()
            deleted_count = await store.clear_namespace(namespace)
            console.print(f"[green]Success! Deleted {deleted_count} passages.[/green]")
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            await store.disconnect()

    asyncio.run(_clear())


@app.command()
def ask(
    ctx: typer.Context,
    question: str = typer.Argument(..., help="Question about Amine"),
    stream: bool = typer.Option(True, "--stream/--no-stream", help="Print the answer as it is generated"),
    model: str | None = typer.Option(None, "--model", "-m", help="Override LLM_MODEL_NAME"),
    temperature: float | None = typer.Option(None, "--temperature", "-t", help="Override LLM_TEMPERATURE"),
    top_k: int | None = typer.Option(None, "--top-k", "-k", help="Passages retrieved per question")
):
    """Ask the portfolio agent a question."""
    settings = _settings(ctx)
    overrides = AgentOverrides(model=model, temperature=temperature, top_k=top_k)

    async def _ask():
        try:
            agent = await create_portfolio_agent(settings, overrides)
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)

        try:
            if stream:
                async for fragment in agent.stream(question):
                    console.print(fragment, end="", markup=False, highlight=False)
                console.print()
                pages = suggest_pages(question)
            else:
                result = await agent.query(question)
                console.print(Panel(result.answer, title="Amine Buddy", border_style="magenta"))
                pages = result.suggested_pages or []

            if pages:
                _print_pages(pages)

            usage = agent.usage
            console.print(
                f"[dim]Tokens: {usage.total_input_tokens + usage.total_output_tokens:,} "
                f"({usage.total_input_tokens:,}/{usage.total_output_tokens:,})[/dim]"
            )
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            await agent.close()

    asyncio.run(_ask())


@app.command()
def suggest(query: str = typer.Argument(..., help="Question to classify")):
    """Show which portfolio pages a question would suggest."""
    pages = suggest_pages(query)
    if not pages:
        console.print("[dim]No page suggestions.[/dim]")
        return
    _print_pages(pages)


@app.command()
def serve(
    ctx: typer.Context,
    host: str | None = typer.Option(None, "--host", help="Override SERVER_HOST"),
    port: int | None = typer.Option(None, "--port", "-p", help="Override SERVER_PORT"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes")
):
    """Run the HTTP server with the streaming and one-shot endpoints."""
    import uvicorn

    settings = _settings(ctx)
    uvicorn.run(
        "aminebuddy.server.app:create_default_app",
        factory=True,
        host=host or settings.server.host,
        port=port or settings.server.port,
        reload=reload,
        log_level=settings.log_level.lower()
    )


@app.command()
def chat(
    ctx: typer.Context,
    url: str | None = typer.Option(None, "--url", "-u", help="Override BUDDY_API_URL"),
    sync: bool = typer.Option(False, "--sync", help="Use the one-shot endpoint instead of streaming")
):
    """Open the copilot chat widget in the terminal."""
    from ..ui import run_copilot

    settings = ctx.obj if isinstance(ctx.obj, Settings) else load_settings()
    configure_tui_logging(settings.log_level)

    transport = get_transport(url or settings.client.api_url, sync=sync)
    asyncio.run(run_copilot(transport, settings.client.site_url))


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
