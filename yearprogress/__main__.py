from yearprogress.app import run

run()
