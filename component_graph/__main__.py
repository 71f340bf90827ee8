from component_graph.cli import cli

cli()
