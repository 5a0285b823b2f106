[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "osdemos"
version = "0.1.0"
description = "Small runnable demonstrations of processes, threads, locks, condition variables, semaphores, scheduling and persistence"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "operating systems",
    "concurrency",
    "threads",
    "semaphores",
    "condition variables",
    "scheduling",
    "education",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
osdemos-lottery = "osdemos.lottery:main"
osdemos-pstack = "osdemos.pstack:main"
osdemos-cas = "osdemos.cas:main"
osdemos-procs = "osdemos.procs:main"
osdemos-udp-server = "osdemos.udp:server_main"
osdemos-udp-client = "osdemos.udp:client_main"
osdemos-cpu = "osdemos.intro:cpu_main"
osdemos-io = "osdemos.intro:io_main"
osdemos-mem = "osdemos.intro:mem_main"
osdemos-threads = "osdemos.intro:threads_main"
osdemos-va = "osdemos.intro:va_main"
osdemos-threads-basic = "osdemos.threads_basic:main"
osdemos-bugs = "osdemos.bugs:main"
osdemos-joins = "osdemos.joins:main"
osdemos-prodcon = "osdemos.prodcon:main"
osdemos-dining = "osdemos.dining:main"
osdemos-sema = "osdemos.semademos:main"

[tool.hatch.build.targets.wheel]
packages = ["osdemos"]

[tool.pytest.ini_options]
addopts = "-ra"
