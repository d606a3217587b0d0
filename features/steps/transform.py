from pathlib import Path

from behave import given, then, when

from features.steps.transform_env import TransformContext

here = Path(__file__).parent


@given("a new project")
def step_new_project(context: TransformContext):
    pyproject = here / "data" / "pyproject.toml"
    context.transform.project_files["pyproject.toml"] = pyproject.read_text()


@given("there is no project file")
def step_no_project(_context: TransformContext):
    pass


@given('the feature file "{rel_path}"')
def step_feature_file(context: TransformContext, rel_path: str):
    context.transform.project_files[rel_path] = context.text + "\n"


@when('I run ly-gherkin with "{args}"')
def step_run(context: TransformContext, args: str):
    context.result = context.transform.run(*args.split())


@when("I run ly-gherkin with no arguments")
def step_run_no_args(context: TransformContext):
    context.result = context.transform.run()


@then("the exit code is {exit_code}")
def step_exit_code(context: TransformContext, exit_code: str):
    assert context.result
    assert context.result.exit_code == int(exit_code), context.result.output


@then('the output contains "{message}"')
def step_output_contains_message(context: TransformContext, message: str):
    assert context.result
    assert message in context.result.output, context.result.output


@then('the file "{rel_path}" contains "{text}"')
def step_file_contains(context: TransformContext, rel_path: str, text: str):
    contents = context.transform.read(rel_path)
    assert text in contents, contents
