from monkminal.app import run

run()
