from reprocheck.cli import app

app()
