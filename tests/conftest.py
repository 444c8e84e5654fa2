import random

import pytest

from classtime.models import ClassSpec


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def shared_teacher_classes():
    return [
        ClassSpec(name="7A", subjects={"Math": 5, "English": 4, "Art": 2},
                  teachers={"Math": "Mr.A", "English": "Ms.B"}, rooms={"Art": "Studio"}),
        ClassSpec(name="7B", subjects={"Math": 5, "English": 4, "Art": 2},
                  teachers={"Math": "Mr.A", "English": "Ms.B"}, rooms={"Art": "Studio"}),
        ClassSpec(name="8A", subjects={"Math": 6, "Science": 5},
                  teachers={"Math": "Mr.A", "Science": "Dr.C"}, rooms={"Science": "Lab"}),
    ]
