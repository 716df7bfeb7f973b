"""Flask CLI commands for admin operations."""
import json
import click
from flask import current_app


def register_cli(app):
    @app.cli.command("init-db")
    def init_db():
        """Create all tables and seed admin credentials."""
        from storefront.extensions import db
        from storefront.services.auth_service import seed_credentials

        db.create_all()
        if seed_credentials():
            click.echo("Admin credentials seeded from configuration.")
        click.echo("Database initialized.")

    @app.cli.command("seed-content")
    @click.option("--force", is_flag=True, help="Overwrite segments that already exist")
    def seed_content(force):
        """Write the built-in content segments (idempotent unless --force)."""
        from storefront.services.segment_service import seed_segments

        seeded = seed_segments(actor="cli", force=force)
        if not seeded:
            click.echo("All segments already exist; skipping seed.")
            return
        click.echo(f"Seeded {len(seeded)} segments: {', '.join(seeded)}")

    @app.cli.command("pull-content")
    @click.option("--url", default=None, help="Content API base URL")
    @click.option("--dump", is_flag=True, help="Print the loaded snapshot as JSON")
    def pull_content(url, dump):
        """Load every segment from a content API and report what refreshed."""
        from storefront.services.content_store import ContentStore

        store = ContentStore(
            url or current_app.config["CONTENT_API_URL"],
            token=current_app.config["CONTENT_API_TOKEN"] or None,
            timeout=current_app.config["CONTENT_API_TIMEOUT"],
        )
        with store:
            refreshed = store.load()
            missing = [k for k in store.keys if k not in refreshed]
            click.echo(f"Refreshed {len(refreshed)}/{len(store.keys)} segments.")
            if missing:
                click.echo(f"  Using defaults for: {', '.join(missing)}")
            if dump:
                click.echo(json.dumps(store.snapshot(), indent=2))

    @app.cli.command("create-product")
    @click.option("--id", "product_id", required=True, help="Reference ID, e.g. JER-100")
    @click.option("--name", required=True)
    @click.option("--category", required=True)
    @click.option("--group", default="", help="Collection name")
    @click.option("--gender", default="Unisex")
    def create_product(product_id, name, category, group, gender):
        """Append a product to the products segment."""
        from storefront.errors import ValidationError
        from storefront.services import catalogue, segment_service

        products = segment_service.get_segment("products") or []
        form = dict(catalogue.EMPTY_PRODUCT, name=name, category=category,
                    categoryGroup=group, gender=gender)
        try:
            products, product = catalogue.create_product(products, form, product_id)
        except ValidationError as e:
            raise click.ClickException(str(e))
        segment_service.replace_segment("products", products, actor="cli")
        click.echo(f"Created: {product['id']}: {name} (order {product['displayOrder']})")

    @app.cli.command("catalogue-index")
    def catalogue_index():
        """Print the group → category browse index."""
        from storefront.services import catalogue, segment_service

        index = catalogue.build_catalogue_index(
            segment_service.get_segment("products") or [],
            segment_service.get_segment("collections") or [],
        )
        for entry in index:
            click.echo(f"{entry['group']}: {', '.join(entry['categories']) or '-'}")
        click.echo(f"Genders: {', '.join(catalogue.GENDERS)}")

    @app.cli.command("stats")
    def stats():
        """Show inquiry statistics."""
        from storefront.services.quote_service import get_stats

        s = get_stats()
        click.echo(f"Total inquiries: {s['total']}")
        click.echo(f"  orders: {s['orders']}")
        click.echo(f"  quotes: {s['quotes']}")
        click.echo(f"  new: {s['new']}")
