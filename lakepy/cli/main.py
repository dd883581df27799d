"""lakepy CLI - Main commands."""
import asyncio
from pathlib import Path
from typing import List

import typer
from rich.console import Console
from rich.table import Table
from rich.tree import Tree

app = typer.Typer(
    name="lakepy",
    help="DFS hierarchical storage CLI",
    add_completion=False
)
console = Console()

TOKEN_OPTION = typer.Option(..., "--token", envvar="LAKEPY_TOKEN", help="Bearer token")
BASE_URL_OPTION = typer.Option(None, "--base-url", envvar="LAKEPY_DFS_URL", help="DFS endpoint")


def run_async(coro):
    """Run async function, turning lakepy failures into exit code 1."""
    from lakepy import LakeException

    try:
        return asyncio.run(coro)
    except LakeException as e:
        console.print(f"Error: {e}", style="red", markup=False, highlight=False)
        raise typer.Exit(1)


def make_client(token: str, base_url: str = None):
    from lakepy import LakeClient, APIConfig

    config = APIConfig(dfs_base_url=base_url) if base_url else APIConfig.default()
    return LakeClient(token, config=config)


def add_nodes(branch: Tree, nodes: List):
    """Render a forest into a rich Tree branch."""
    for node in nodes:
        if node.is_shortcut:
            label = f"[magenta]{node.name}[/magenta] [dim]-> {node.metadata.account_type or 'shortcut'}[/dim]"
        elif node.is_directory:
            label = f"[blue]{node.name}/[/blue]"
        else:
            label = node.name
        add_nodes(branch.add(label), node.children)


@app.command()
def ls(
    workspace_id: str = typer.Argument(..., help="Workspace ID"),
    directory: str = typer.Argument(..., help="Directory, e.g. <itemId>/Files/"),
    recursive: bool = typer.Option(True, "--recursive/--flat", help="List recursively"),
    expand: bool = typer.Option(False, "--expand-shortcuts", "-x", help="Expand every shortcut"),
    token: str = TOKEN_OPTION,
    base_url: str = BASE_URL_OPTION,
):
    """Show a directory as a tree."""
    from lakepy import Loaded, LoadFailed, LakeException

    async def show_tree():
        async with make_client(token, base_url) as lake:
            session = lake.explorer(workspace_id, directory, recursive)
            state = await session.refresh()
            if isinstance(state, LoadFailed):
                console.print(f"[red]Listing failed: {state.error}[/red]")
                raise typer.Exit(1)

            if expand and isinstance(state, Loaded):
                shortcuts = [n for root in session.forest for n in root.walk() if n.is_shortcut]
                for node in shortcuts:
                    try:
                        await session.expander.expand(node)
                    except LakeException as e:
                        console.print(f"[yellow]Could not expand {node.full_path}: {e}[/yellow]")

            tree = Tree(f"[bold]{directory}[/bold]")
            add_nodes(tree, session.forest)
            console.print(tree)

    run_async(show_tree())


@app.command()
def files(
    workspace_id: str = typer.Argument(..., help="Workspace ID"),
    item_id: str = typer.Argument(..., help="Item ID"),
    token: str = TOKEN_OPTION,
    base_url: str = BASE_URL_OPTION,
):
    """List files of an item."""

    async def list_files():
        async with make_client(token, base_url) as lake:
            entries = await lake.list_files(workspace_id, item_id)

        table = Table()
        table.add_column("Type", style="cyan")
        table.add_column("Path")
        for entry in entries:
            type_str = "S" if entry.is_shortcut else ("D" if entry.is_directory else "F")
            table.add_row(type_str, entry.path)
        console.print(table)

    run_async(list_files())


@app.command()
def tables(
    workspace_id: str = typer.Argument(..., help="Workspace ID"),
    item_id: str = typer.Argument(..., help="Item ID"),
    token: str = TOKEN_OPTION,
    base_url: str = BASE_URL_OPTION,
):
    """List tables of an item."""

    async def list_tables():
        async with make_client(token, base_url) as lake:
            found = await lake.list_tables(workspace_id, item_id)

        table = Table()
        table.add_column("Schema", style="dim")
        table.add_column("Name")
        table.add_column("Path", style="dim")
        for entry in found:
            table.add_row(entry.schema or "-", entry.name, entry.path)
        console.print(table)

    run_async(list_tables())


@app.command()
def cat(
    path: str = typer.Argument(..., help="Storage path"),
    as_base64: bool = typer.Option(False, "--base64", help="Print content base64-encoded"),
    token: str = TOKEN_OPTION,
    base_url: str = BASE_URL_OPTION,
):
    """Print a file."""
    from lakepy import NotFound

    async def show_file():
        async with make_client(token, base_url) as lake:
            try:
                content = await lake.read(path, binary=as_base64)
            except NotFound:
                console.print(f"[red]Path not found: {path}[/red]")
                raise typer.Exit(1)
        console.print(content, markup=False, highlight=False)

    run_async(show_file())


@app.command()
def upload(
    file_path: Path = typer.Argument(..., help="Local file to upload", exists=True, dir_okay=False),
    dest: str = typer.Argument(..., help="Destination storage path"),
    token: str = TOKEN_OPTION,
    base_url: str = BASE_URL_OPTION,
):
    """Upload a local file."""

    async def do_upload():
        async with make_client(token, base_url) as lake:
            size = await lake.upload_file(file_path, dest)
        console.print(f"[green]Uploaded:[/green] {dest} ({size:,} bytes)")

    run_async(do_upload())


@app.command()
def download(
    remote_path: str = typer.Argument(..., help="Storage path"),
    output: Path = typer.Option(None, "--output", "-o", help="Output file path"),
    token: str = TOKEN_OPTION,
    base_url: str = BASE_URL_OPTION,
):
    """Download a file."""
    from lakepy import StoragePath

    async def do_download():
        target = output or Path(StoragePath.parse(remote_path).name)
        async with make_client(token, base_url) as lake:
            written = await lake.download_file(remote_path, target)
        console.print(f"[green]Downloaded:[/green] {written}")

    run_async(do_download())


@app.command()
def mkdir(
    path: str = typer.Argument(..., help="Folder storage path"),
    token: str = TOKEN_OPTION,
    base_url: str = BASE_URL_OPTION,
):
    """Create a folder."""

    async def do_mkdir():
        async with make_client(token, base_url) as lake:
            placeholder = await lake.create_folder(path)
        console.print(f"[green]Created folder:[/green] {path} ({placeholder})")

    run_async(do_mkdir())


@app.command()
def rm(
    path: str = typer.Argument(..., help="Storage path"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
    token: str = TOKEN_OPTION,
    base_url: str = BASE_URL_OPTION,
):
    """Delete a file or folder (recursively)."""
    if not force and not typer.confirm(f"Delete {path}?"):
        raise typer.Exit(0)

    async def do_rm():
        async with make_client(token, base_url) as lake:
            result = await lake.delete(path)
        if not result.deleted:
            console.print(f"[red]Delete failed: {result.error}[/red]")
            raise typer.Exit(1)
        console.print(f"[green]Deleted:[/green] {path}")

    run_async(do_rm())


@app.command()
def exists(
    path: str = typer.Argument(..., help="Storage path"),
    token: str = TOKEN_OPTION,
    base_url: str = BASE_URL_OPTION,
):
    """Check whether a file exists (exit code 1 if not)."""

    async def check():
        async with make_client(token, base_url) as lake:
            return await lake.exists(path)

    if run_async(check()):
        console.print(f"[green]{path} exists[/green]")
    else:
        console.print(f"[yellow]{path} does not exist[/yellow]")
        raise typer.Exit(1)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
