import click
import logging

from .base_config import ConfigError
from .cache import CacheUnavailableError
from .catalog import EmptyResultError, ReleaseCatalog
from .config import Config
from .dist import (
    dist_branch,
    dist_container,
    dist_override,
    dist_repo,
    dist_updates,
    dist_version,
    DistParseError,
    koji_cmd,
    mock_config,
    parse_dist,
    rpkg_cmd,
    rpm_dist_tag,
)
from .release_info import DecodeError, MalformedVersionError
from .utils import SubstitutionError


logger = logging.getLogger(__name__)

_CATALOG_ERRORS = (CacheUnavailableError, DecodeError, EmptyResultError, MalformedVersionError)


def _run(f, *args):
    try:
        return f(*args)
    except _CATALOG_ERRORS as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.pass_context
@click.option('--config-file', '-c',
              help='Config file')
@click.option('-v', '--verbose', is_flag=True,
              help='Show verbose debugging output')
def cli(ctx, config_file, verbose):
    FORMAT = "%(asctime)s:%(levelname)s:%(name)s:%(message)s"
    logging.basicConfig(level=logging.WARNING, format=FORMAT)
    if verbose:
        logging.getLogger('fedora_dists').setLevel(logging.INFO)

    try:
        if config_file is not None:
            cfg = Config.from_path(config_file)
        else:
            cfg = Config.defaults()
    except (ConfigError, SubstitutionError) as e:
        raise click.ClickException(f"{config_file or 'config'}: {e}") from e

    ctx.obj = {
        'config': cfg,
        'catalog': ReleaseCatalog(cfg),
    }


@cli.command(name="releases")
@click.pass_context
@click.option('--product', '-p',
              help='Only show releases of this product (fedora, epel)')
def releases(ctx, product):
    catalog = ctx.obj['catalog']

    if product is None:
        ids = _run(catalog.get_release_ids)
    else:
        ids = [r.product_version_id for r in _run(catalog.get_product_releases, product)]

    for release_id in ids:
        click.echo(release_id)


@cli.command(name="dists")
@click.pass_context
def dists(ctx):
    for dist in _run(ctx.obj['catalog'].get_fedora_dists):
        click.echo(dist)


@cli.command(name="rawhide")
@click.pass_context
def rawhide(ctx):
    click.echo(_run(ctx.obj['catalog'].get_rawhide_dist))


@cli.command(name="latest")
@click.pass_context
def latest(ctx):
    click.echo(_run(ctx.obj['catalog'].get_latest_fedora_dist))


@cli.command(name="latest-epel")
@click.pass_context
def latest_epel(ctx):
    click.echo(_run(ctx.obj['catalog'].get_latest_epel_dist))


@cli.command(name="info")
@click.pass_context
@click.argument('dist')
@click.option('--arch', default='x86_64', show_default=True,
              help='Architecture for the mock config name')
def info(ctx, dist, arch):
    """Show the names derived from DIST (f40, epel9, rhel-9.2, ...)"""
    try:
        target = parse_dist(dist)
    except DistParseError as e:
        raise click.BadParameter(str(e), param_hint="DIST") from e

    branch = _run(ctx.obj['catalog'].get_latest_fedora_dist)
    logger.info("Latest branched Fedora release is %s", branch)

    updates = dist_updates(branch, target)

    rows = [
        ("branch", dist_branch(branch, target)),
        ("repo", dist_repo(branch, target)),
        ("updates", updates if updates is not None else "-"),
        ("override", "yes" if dist_override(branch, target) else "no"),
        ("version", dist_version(branch, target)),
        ("mock", mock_config(branch, target, arch)),
        ("dist-tag", rpm_dist_tag(target)),
        ("koji", koji_cmd(target)),
        ("rpkg", rpkg_cmd(target)),
        ("container", dist_container(target)),
    ]
    for key, value in rows:
        click.echo(f"{key}: {value}")
