"""Thematic map command-line interface."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from thematicmap.domain.errors import ThematicMapError


@click.group()
@click.option("--config", "-c", default=None, help="Path to config YAML.")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, config: str | None, verbose: bool) -> None:
    """Strategic diagrams (thematic maps) of co-occurrence networks."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["config"] = config


def _run(ctx: click.Context, network: str, overrides: dict):
    from thematicmap.adapters.network_file import load_network
    from thematicmap.config import build_service, load_settings

    algorithm = overrides.pop("algorithm", None)
    try:
        settings = load_settings(
            ctx.obj["config"],
            overrides={
                "thematic_map": overrides,
                "community_detection": {"adapter": algorithm},
            },
        )
        service = build_service(settings)
        return settings, service.build(load_network(network))
    except (ThematicMapError, FileNotFoundError) as exc:
        raise click.ClickException(str(exc)) from exc


@main.command()
@click.argument("network", type=click.Path(exists=True))
@click.option("--minfreq", type=int, default=None, help="Minimum word occurrence.")
@click.option("--n", "n", type=int, default=None, help="Maximum number of terms.")
@click.option("--seed", type=int, default=None, help="Community detection seed.")
@click.option("--algorithm", type=click.Choice(["louvain", "leiden"]), default=None)
@click.option("--out", "-o", default=None, help="Write clusters/words JSON here.")
@click.option("--html", default=None, help="Write the rendered map (HTML) here.")
@click.pass_context
def build(
    ctx: click.Context,
    network: str,
    minfreq: int | None,
    n: int | None,
    seed: int | None,
    algorithm: str | None,
    out: str | None,
    html: str | None,
) -> None:
    """Build the thematic map of a NETWORK file (JSON or CSV)."""
    settings, result = _run(
        ctx, network, {"minfreq": minfreq, "n": n, "seed": seed, "algorithm": algorithm}
    )

    payload = json.dumps(result.to_dict(), indent=2)
    if out:
        Path(out).parent.mkdir(parents=True, exist_ok=True)
        Path(out).write_text(payload)
        click.echo(f"Wrote {result.nclust} clusters to {out}")
    else:
        click.echo(payload)

    if html:
        from thematicmap.config import build_renderer

        renderer = build_renderer(settings.rendering)
        renderer.save(renderer.render(result.map, title="Thematic map"), html)
        click.echo(f"Map written to {html}")


@main.command()
@click.argument("network", type=click.Path(exists=True))
@click.option("--minfreq", type=int, default=None, help="Minimum word occurrence.")
@click.pass_context
def quadrants(ctx: click.Context, network: str, minfreq: int | None) -> None:
    """Print each cluster of NETWORK with its quadrant."""
    _, result = _run(ctx, network, {"minfreq": minfreq})

    click.echo(f"=== {result.nclust} clusters ===")
    for c in result.clusters:
        click.echo(
            f"  [{c.cluster}] {c.label:<30} {c.quadrant:<9} "
            f"centrality={c.centrality:.3f} density={c.density:.3f} freq={c.frequency:g}"
        )


if __name__ == "__main__":
    main()
