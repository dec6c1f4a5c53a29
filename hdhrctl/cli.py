"""Typer CLI entrypoint."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import typer

from hdhrctl import __version__
from hdhrctl.core.config import Config, load_config
from hdhrctl.core.errors import DeviceDiscoveryError, HdhrctlError
from hdhrctl.core.logsink import LoggingSink, LogSink, NullSink
from hdhrctl.core.service import HdhrService

app = typer.Typer(help="HDHomeRun tuner control via hdhomerun_config")

DeviceOption = typer.Option(None, "--device", help="Device ID (defaults to config, then first discovered)")
TunerOption = typer.Option(None, "--tuner", help="Tuner index (defaults to config, then first tuner)")


@dataclass
class CliState:
    config_path: Path | None = None
    verbose: bool = False


@app.callback()
def main(
    ctx: typer.Context,
    config: Path | None = typer.Option(None, "--config", help="Path to config YAML"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log commands and responses"),
) -> None:
    ctx.obj = CliState(config_path=config, verbose=verbose)
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _build_service(ctx: typer.Context) -> tuple[HdhrService, Config]:
    state: CliState = ctx.obj or CliState()
    config = load_config(state.config_path)
    sink: LogSink = LoggingSink() if state.verbose else NullSink()
    return HdhrService.from_config(config, sink=sink), config


def _resolve_device(service: HdhrService, config: Config, device: str | None) -> str:
    if device or config.device_id:
        return device or config.device_id
    discovered = service.discover()
    if not discovered:
        raise DeviceDiscoveryError("No devices found")
    return next(iter(discovered))


def _open_session(
    ctx: typer.Context,
    device: str | None,
    tuner: int | None,
) -> tuple[HdhrService, Config]:
    service, config = _build_service(ctx)
    service.set_current_device_id(_resolve_device(service, config, device))

    tuner_id = tuner if tuner is not None else config.tuner_id
    if tuner_id is None:
        tuner_id = service.list_tuners()[0]
    service.set_current_tuner_id(tuner_id)
    return service, config


def _fail(exc: HdhrctlError) -> typer.Exit:
    typer.echo(f"Error: {exc}", err=True)
    return typer.Exit(code=1)


@app.command("discover")
def discover(ctx: typer.Context) -> None:
    """List HDHomeRun devices on the local network."""
    try:
        service, _ = _build_service(ctx)
        for device in service.discover().values():
            tuners = ", ".join(str(t) for t in device.tuners)
            typer.echo(f"{device.id} {device.ip} tuners: {tuners}")
    except HdhrctlError as exc:
        raise _fail(exc) from None


@app.command("features")
def features(ctx: typer.Context, device: str | None = DeviceOption) -> None:
    """List features reported by a device."""
    try:
        service, config = _build_service(ctx)
        device_id = _resolve_device(service, config, device)
        typer.echo(f"Device: {device_id}")
        for name, values in service.get_features(device_id).items():
            typer.echo(f"  {name}: {', '.join(values)}")
    except HdhrctlError as exc:
        raise _fail(exc) from None


@app.command("status")
def status(ctx: typer.Context, device: str | None = DeviceOption, tuner: int | None = TunerOption) -> None:
    """Show tuner status (lock, signal strength, quality)."""
    try:
        service, _ = _open_session(ctx, device, tuner)
        for key, value in service.get_tuner_status().items():
            typer.echo(f"{key}={value}")
    except HdhrctlError as exc:
        raise _fail(exc) from None


@app.command("scan")
def scan(
    ctx: typer.Context,
    device: str | None = DeviceOption,
    tuner: int | None = TunerOption,
    channel_map: str | None = typer.Option(None, "--channelmap", help="Channel map to set before scanning"),
) -> None:
    """Scan all channels on a tuner and list the programs found."""
    try:
        service, config = _open_session(ctx, device, tuner)
        channel_map = channel_map or config.channel_map
        if channel_map:
            service.set_channel_map(channel_map)
        channels = service.scan()
        if not channels:
            typer.echo("No channels found")
            return
        for number, channel in channels.items():
            typer.echo(f"{number} ({channel.internal_channel}) lock={channel.lock}")
            for program in channel.programs.values():
                typer.echo(f"  {program.number}: {program.friendly_number} {program.friendly_name}")
    except HdhrctlError as exc:
        raise _fail(exc) from None


@app.command("channel")
def set_channel(
    ctx: typer.Context,
    channel: str,
    device: str | None = DeviceOption,
    tuner: int | None = TunerOption,
) -> None:
    """Tune to CHANNEL (for example auto:473000000 or 8vsb:14)."""
    try:
        service, _ = _open_session(ctx, device, tuner)
        service.set_channel(channel)
        typer.echo(f"Tuner {service.current_tuner_id} on {service.current_device_id} set to channel {channel}")
    except HdhrctlError as exc:
        raise _fail(exc) from None


@app.command("program")
def set_program(
    ctx: typer.Context,
    program: int,
    device: str | None = DeviceOption,
    tuner: int | None = TunerOption,
) -> None:
    """Select PROGRAM on the tuned channel."""
    try:
        service, _ = _open_session(ctx, device, tuner)
        service.set_program(program)
        typer.echo(f"Tuner {service.current_tuner_id} on {service.current_device_id} set to program {program}")
    except HdhrctlError as exc:
        raise _fail(exc) from None


@app.command("target")
def set_target(
    ctx: typer.Context,
    ip: str,
    port: int,
    protocol: str | None = typer.Option(None, "--protocol", help="rtp or udp"),
    device: str | None = DeviceOption,
    tuner: int | None = TunerOption,
) -> None:
    """Stream the tuner output to IP:PORT."""
    try:
        service, config = _open_session(ctx, device, tuner)
        protocol = protocol or config.target_protocol
        service.set_target(ip, port, protocol)
        typer.echo(f"Target set to {protocol}://{ip}:{port}")
    except HdhrctlError as exc:
        raise _fail(exc) from None


@app.command("get-target")
def get_target(ctx: typer.Context, device: str | None = DeviceOption, tuner: int | None = TunerOption) -> None:
    """Show the tuner's current streaming target."""
    try:
        service, _ = _open_session(ctx, device, tuner)
        typer.echo(service.get_target())
    except HdhrctlError as exc:
        raise _fail(exc) from None


@app.command("version")
def version() -> None:
    """Print the hdhrctl version."""
    typer.echo(__version__)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
