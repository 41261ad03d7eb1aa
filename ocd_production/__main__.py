from .main import run_extraction

run_extraction(prog_name="ocd-production")
