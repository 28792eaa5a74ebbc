from webmap_explorer.main import run

run()
