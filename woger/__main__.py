from woger.cli.app import cli

cli()
