"""
CLI interface for the Kondate planner.
"""
import click
import json
import logging

from kondate.config import settings
from kondate.engine.recipe_generator import RecipeGenerator
from kondate.engine.step_scheduler import StepScheduler
from kondate.engine.timeline import render_timeline
from kondate.errors import KondateError
from kondate.models.schemas import Genre, RecipeRequest, Schedule


def _load_steps(data):
    """Accept a bare list of steps or a {"steps": [...]} document."""
    if isinstance(data, dict) and "steps" in data:
        return data["steps"]
    return data


def _echo_problems(error: KondateError):
    """Print per-step validation problems, if any."""
    for problem in error.details.get("problems", []):
        step = f"step {problem['step_id']}" if problem.get("step_id") is not None else f"record #{problem['index']}"
        field = f" ({problem['field']})" if problem.get("field") else ""
        click.echo(f"  • {step}{field}: {problem['message']}", err=True)


@click.group()
@click.option('--log-level', default='WARNING', show_default=True,
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              help='Logging verbosity')
def cli(log_level: str):
    """Kondate - cooking step scheduler"""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.WARNING),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


@cli.command()
@click.argument('steps_file', type=click.File('r'))
@click.option('--json', 'as_json', is_flag=True, help='Print the schedule as JSON')
@click.option('--width', default=None, type=click.IntRange(min=10), help='Timeline width in characters')
def schedule(steps_file, as_json: bool, width):
    """Schedule the cooking steps in STEPS_FILE ('-' reads stdin)."""
    try:
        data = json.load(steps_file)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid JSON: {e}")

    try:
        result = StepScheduler().schedule(_load_steps(data))
    except KondateError as e:
        _echo_problems(e)
        raise click.ClickException(e.message)

    _print_schedule(result, as_json, width)


@cli.command()
@click.option('--ingredient', '-i', 'ingredients', multiple=True, required=True,
              help='Ingredient on hand (repeatable)')
@click.option('--genre', default=Genre.ANY.value, show_default=True,
              type=click.Choice([g.value for g in Genre]), help='Cuisine genre')
@click.option('--members', default=None, help='Family members, e.g. "2 adults, 1 child"')
@click.option('--ages', default=None, help='Family ages, e.g. "30s, 5"')
@click.option('--request', 'additional_request', default=None, help='Free-form extra request')
@click.option('--json', 'as_json', is_flag=True, help='Print the recipe as JSON')
def generate(ingredients, genre: str, members, ages, additional_request, as_json: bool):
    """Generate a recipe with OpenAI and show its cooking timeline."""
    request = RecipeRequest(
        ingredients=list(ingredients),
        genre=Genre(genre),
        family_members=members,
        family_ages=ages,
        additional_request=additional_request,
    )

    if not as_json:
        click.echo(f"\n🍳 Generating a recipe with {', '.join(request.ingredients)}...\n")

    try:
        recipe = RecipeGenerator().generate(request)
    except KondateError as e:
        _echo_problems(e)
        raise click.ClickException(e.message)

    if as_json:
        click.echo(json.dumps(recipe.model_dump(mode='json', by_alias=True), ensure_ascii=False, indent=2))
        return

    click.echo("=" * 60)
    click.echo(recipe.title)
    click.echo("=" * 60)
    if recipe.menu_items:
        click.echo(f"Menu: {', '.join(recipe.menu_items)}")
    click.echo(f"Servings: {recipe.servings}    Time: {recipe.total_time}")

    click.echo("\nINGREDIENTS:")
    if isinstance(recipe.ingredients, dict):
        for dish, items in recipe.ingredients.items():
            click.echo(f"  [{dish}]")
            for item in items:
                click.echo(f"    • {item}")
    else:
        for item in recipe.ingredients:
            click.echo(f"  • {item}")

    click.echo("\nINSTRUCTIONS:")
    for i, instruction in enumerate(recipe.instructions, 1):
        click.echo(f"  {i}. {instruction}")

    if recipe.tips:
        click.echo("\nTIPS:")
        for tip in recipe.tips:
            click.echo(f"  • {tip}")

    if recipe.steps:
        click.echo("")
        _print_schedule(
            Schedule(
                steps=recipe.steps,
                optimized_time=recipe.optimized_time or 0,
                converged=recipe.converged,
                advisories=recipe.advisories,
            ),
            as_json=False,
            width=None,
        )


def _print_schedule(result: Schedule, as_json: bool, width):
    if as_json:
        click.echo(result.model_dump_json(by_alias=True, indent=2))
        return

    click.echo(render_timeline(result, width=width or settings.timeline_width))
    for advisory in result.advisories:
        click.echo(f"⚠️  {advisory}")


if __name__ == '__main__':
    cli()
