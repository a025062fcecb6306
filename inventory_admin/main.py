import argparse
import asyncio
import json
import sys

from inventory_admin.app import InventoryAdmin
from inventory_admin.config import Config
from inventory_admin.exceptions import InventoryAdminError, ValidationError
from inventory_admin.logging_setup import setup_logging, get_logger, log_exception

ENTITIES = ('products', 'suppliers', 'locations', 'users')


def parse_value(raw):
    """Interpret a command-line value as JSON where possible, else keep the string."""
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def _split_pairs(pairs):
    for pair in pairs or []:
        key, sep, raw = pair.partition('=')
        if not sep or not key:
            raise ValidationError(f"Expected key=value, got {pair!r}")
        yield key.strip(), raw


def parse_assignments(pairs):
    """Turn ["name=Widget", "price=9.5"] into {"name": "Widget", "price": 9.5}."""
    return {key: parse_value(raw) for key, raw in _split_pairs(pairs)}


def parse_facets(pairs):
    """Turn ["category=2024"] into {"category": "2024"}; facet values are matched as text."""
    return dict(_split_pairs(pairs))


def parse_id(raw):
    return int(raw) if raw.isdigit() else raw


def print_rows(rows):
    for row in rows:
        print(json.dumps(row, default=str))


async def list_entities(app, args):
    """Fetch an entity collection and print the rows matching the search."""
    store = app.stores[args.entity]
    await store.fetch_all()
    if store.error:
        print(f"Error: {store.error}", file=sys.stderr)
        return False

    print_rows(store.search(args.search, **parse_facets(args.facet)))
    return True


async def create_entity(app, args):
    store = app.stores[args.entity]
    row = await store.create(parse_assignments(args.set))
    if row is None:
        print(f"Error: {store.error}", file=sys.stderr)
        return False

    print_rows([row])
    return True


async def update_entity(app, args):
    store = app.stores[args.entity]
    row = await store.update(parse_id(args.id), parse_assignments(args.set))
    if row is None:
        print(f"Error: {store.error}", file=sys.stderr)
        return False

    print_rows([row])
    return True


async def delete_entity(app, args):
    store = app.stores[args.entity]
    if not await store.delete(parse_id(args.id)):
        print(f"Error: {store.error}", file=sys.stderr)
        return False

    print(f"Deleted {args.entity} {args.id}")
    return True


async def show_stats(app, args):
    log = get_logger('dashboard')
    await app.products.fetch_all()
    try:
        stats = await app.dashboard.collect(app.products.items if not app.products.error else None)
    except InventoryAdminError as e:
        log.error(f"Error collecting dashboard stats: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return False

    print(json.dumps(stats._asdict()))
    return True


async def show_theme(app, args):
    if args.toggle:
        app.preferences.toggle()
    elif args.dark is not None:
        app.preferences.set(args.dark == 'on')
    print(app.preferences.theme)
    return True


COMMANDS = {
    'list': list_entities,
    'create': create_entity,
    'update': update_entity,
    'delete': delete_entity,
    'stats': show_stats,
    'theme': show_theme,
}


async def run(args, app_config):
    """Build the application, optionally sign in, and dispatch the command."""
    log = setup_logging(app_config).app_logger

    async with await InventoryAdmin.create(app_config) as app:
        if args.email:
            if app.auth is None:
                log.error("Sign-in is only available with the Supabase backend")
                return False
            await app.auth.sign_in(args.email, args.password or '')

        if app.auth is not None and args.command != 'theme' and not app.session.is_authenticated:
            log.warning("No authenticated session; row-level security may hide data")

        return await COMMANDS[args.command](app, args)


def build_parser():
    parser = argparse.ArgumentParser(description='Inventory Admin')
    parser.add_argument('--config', type=str, help='Path to settings.ini')
    parser.add_argument('--email', type=str, help='Sign in with this email before running the command')
    parser.add_argument('--password', type=str, help='Password for --email')

    subparsers = parser.add_subparsers(dest='command', help='Commands')
    subparsers.required = True

    list_parser = subparsers.add_parser('list', help='List and search rows')
    list_parser.add_argument('entity', choices=ENTITIES)
    list_parser.add_argument('--search', '-s', type=str, default='', help='Free-text search')
    list_parser.add_argument('--facet', '-f', action='append', metavar='FIELD=VALUE',
                             help='Exact-match facet filter, e.g. category=Tools')

    create_parser = subparsers.add_parser('create', help='Create a row')
    create_parser.add_argument('entity', choices=ENTITIES)
    create_parser.add_argument('--set', action='append', metavar='FIELD=VALUE', required=True)

    update_parser = subparsers.add_parser('update', help='Update fields of a row')
    update_parser.add_argument('entity', choices=ENTITIES)
    update_parser.add_argument('id')
    update_parser.add_argument('--set', action='append', metavar='FIELD=VALUE', required=True)

    delete_parser = subparsers.add_parser('delete', help='Delete a row')
    delete_parser.add_argument('entity', choices=ENTITIES)
    delete_parser.add_argument('id')

    subparsers.add_parser('stats', help='Show dashboard figures')

    theme_parser = subparsers.add_parser('theme', help='Show or change the display mode')
    theme_parser.add_argument('--toggle', action='store_true', help='Switch between light and dark')
    theme_parser.add_argument('--dark', choices=('on', 'off'), help='Set dark mode explicitly')

    return parser


def main(argv=None):
    """Main application entry point."""
    args = build_parser().parse_args(argv)
    app_config = Config(args.config)
    setup_logging(app_config)

    try:
        ok = asyncio.run(run(args, app_config))
    except InventoryAdminError as e:
        log_exception('app', e, f"Command {args.command} failed")
        print(json.dumps(e.to_dict(), default=str), file=sys.stderr)
        ok = False

    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
