import asyncio
from pathlib import Path

import click

from imgbb.client import ImgBB
from imgbb.config import settings
from imgbb.core.exceptions import ImgBBError
from imgbb.core.logging import setup_logging
from imgbb.schemas.images import ApiResponse, UploadOptions


def _resolve_key(key: str | None) -> str:
    if key:
        return key
    if settings.api_key is not None:
        return settings.api_key.get_secret_value()
    raise click.UsageError("No API key given. Pass --key or set IMGBB_API_KEY.")


def _print_result(response: ApiResponse) -> None:
    data = response.data
    if data is None:
        click.secho("Upload accepted, but the response carried no image data.", fg="yellow")
        return
    click.secho("Upload successful!", fg="green")
    click.secho(f"Image ID: {data.id or ''}")
    click.secho(f"Image URL: {data.direct_url or ''}", fg="cyan")
    click.secho(f"Viewer URL: {data.viewer_url or ''}")
    click.secho(f"Display URL: {data.display_url or ''}")
    if data.delete_url:
        click.secho(f"Delete URL: {data.delete_url}", fg="red")
    if data.width is not None and data.height is not None:
        click.secho(f"Dimensions: {data.width}x{data.height}")
    if data.size_bytes is not None:
        click.secho(f"Size: {data.size_bytes} bytes")
    if data.expires_in_seconds:
        click.secho(f"Expires in: {data.expires_in_seconds} seconds")


async def _upload(key: str, timeout: float | None, path: Path, options: UploadOptions) -> ApiResponse:
    async with ImgBB(key, timeout=timeout, user_agent=settings.user_agent, upload_url=settings.upload_url) as imgbb:
        return await imgbb.upload(path, options)


async def _delete(key: str, timeout: float | None, delete_url: str) -> None:
    async with ImgBB(key, timeout=timeout, user_agent=settings.user_agent) as imgbb:
        await imgbb.delete(delete_url)


@click.group()
@click.option("--log-level", default=settings.log_level, help="Log level for diagnostic output")
def cli(log_level: str) -> None:
    """Upload images to and delete images from ImgBB"""
    setup_logging(log_level)


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--key", "-k", help="ImgBB API key (defaults to IMGBB_API_KEY)")
@click.option("--timeout", "-t", type=click.FLOAT, default=settings.timeout, help="Request timeout in seconds")
@click.option("--expiration", "-e", type=click.IntRange(min=0), help="Seconds until the image expires")
@click.option("--name", "-n", help="Name for the uploaded image")
@click.option("--title", help="Title for the uploaded image")
@click.option("--album", "-a", help="Album ID to add the image to")
def upload(
    path: Path,
    key: str | None,
    timeout: float | None,
    expiration: int | None,
    name: str | None,
    title: str | None,
    album: str | None,
) -> None:
    """Upload an image file"""
    options = UploadOptions(expiration_seconds=expiration, name=name, title=title, album_id=album)
    try:
        response = asyncio.run(_upload(_resolve_key(key), timeout, path, options))
    except ImgBBError as error:
        click.secho(f"Upload failed ({error.kind.value}): {error.message}", fg="red", err=True)
        raise SystemExit(1) from error
    _print_result(response)


@cli.command()
@click.argument("delete_url")
@click.option("--key", "-k", help="ImgBB API key (defaults to IMGBB_API_KEY)")
@click.option("--timeout", "-t", type=click.FLOAT, default=settings.timeout, help="Request timeout in seconds")
def delete(delete_url: str, key: str | None, timeout: float | None) -> None:
    """Delete an image using its delete URL"""
    try:
        asyncio.run(_delete(_resolve_key(key), timeout, delete_url))
    except ImgBBError as error:
        click.secho(f"Delete failed ({error.kind.value}): {error.message}", fg="red", err=True)
        raise SystemExit(1) from error
    click.secho("Image deleted.", fg="green")


if __name__ == "__main__":
    cli()
