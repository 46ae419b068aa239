# gunicorn taskboard.main:app -c gunicorn_conf.py
import multiprocessing

bind = "0.0.0.0:5000"

workers = multiprocessing.cpu_count() * 2 + 1
worker_class = "uvicorn.workers.UvicornWorker"

timeout = 60
keepalive = 5

accesslog = "-"
errorlog = "-"
loglevel = "info"

name = "taskboard_api"
