import sys

from invoke import run, task


@task
def test(ctx, all=False):
    test_cmd = [
        "pytest",  # Test command
        "--cov-report term-missing",  # Print only uncovered lines to stdout
        "--cov-config setup.cfg",  # Use this file for configuration
        "--cov formdata",  # Test only this package
        "--timeout=30",  # Each test should timeout after 30 sec
    ]

    # Test in this directory
    test_cmd.append("tests")

    # Run the command.
    res = run(" ".join(test_cmd), pty=False)
    return res.ok


@task
def deploy(ctx):
    if not test(ctx):
        print("Tests must pass before deploying!", file=sys.stderr)
        return

    # Build source distribution and wheel
    run("python setup.py sdist bdist_wheel")

    # Upload distributions from last step to pypi
    run("twine upload dist/*")
