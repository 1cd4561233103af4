from pgp_encrypt.cli import run

run()
