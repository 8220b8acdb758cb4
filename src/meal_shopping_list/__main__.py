from meal_shopping_list.cli import cli

cli()
