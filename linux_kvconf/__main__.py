from linux_kvconf.cli import run

run()
