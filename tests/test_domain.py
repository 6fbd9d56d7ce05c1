from wle_ml.domain.exercises import ExecutionClass, describe_label


def test_describe_label():
    assert ExecutionClass("A") is ExecutionClass.CORRECT
    assert describe_label("E") == "throwing the hips to the front"
    assert describe_label("Z") == "unknown"
