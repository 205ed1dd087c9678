from core.source_role import Link, Other, Submit, default_yes_action


class FakeForm:
    def __init__(self):
        self.submits = 0

    def submit(self):
        self.submits += 1


def test_submit_role_submits_form_and_does_not_navigate():
    form = FakeForm()
    visited = []
    default_yes_action(Submit(form), visited.append)()
    assert form.submits == 1
    assert visited == []


def test_submit_role_without_form_does_nothing():
    visited = []
    default_yes_action(Submit(None), visited.append)()
    assert visited == []


def test_link_role_navigates():
    visited = []
    default_yes_action(Link("https://example.com"), visited.append)()
    assert visited == ["https://example.com"]


def test_other_role_does_nothing():
    visited = []
    default_yes_action(Other(), visited.append)()
    assert visited == []


def test_roles_compare_by_value():
    assert Link("a") == Link("a")
    assert Other() == Other()
    assert Submit(None) != Other()
