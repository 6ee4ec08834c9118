from codegraph_fragments.cli import app

app(prog_name="fragdump")
