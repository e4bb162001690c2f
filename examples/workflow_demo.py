#!/usr/bin/env python3
"""
Document Review Workflow Demo

A workflow net always has exactly one active place. Sending a document
back for changes vacates the current place, and "restart" may re-enter
the draft state even when it is already active.
"""

import logging

from metamodel import Model

logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger(__name__)


def declare_review(builder):
    builder.model_type("workflow")
    draft = builder.cell("Draft", initial=1)
    review = builder.cell("InReview")
    published = builder.cell("Published")

    submit = builder.func("submit", role="author")
    approve = builder.func("approve", role="editor")
    reject = builder.func("reject", role="editor")
    restart = builder.func("restart", role="author", allow_reentry=True)

    builder.arrow(draft, submit).arrow(review)
    builder.arrow(review, approve).arrow(published)
    builder.arrow(review, reject).arrow(draft)
    builder.arrow(restart, draft)


def run(model, actions):
    vm = model.vm
    state = vm.initial_vector()
    for action in actions:
        res = vm.transform(state, action)
        flags = ", ".join(
            name for name in ("inhibited", "overflow", "underflow") if getattr(res, name)
        )
        status = "ok" if res.ok else "rejected"
        logger.info(f"[{res.role}] {action}: {status} {flags}".rstrip())
        if res.ok:
            state = res.output
    active = [place for place, tokens in vm.marking(state).items() if tokens]
    print(f"✓ Finished in {active[0]}")


def main():
    print("=" * 50)
    print("Document Review Workflow")
    print("=" * 50)
    model = Model.new(declare_review)
    print(f"Roles: {sorted(model.vm.roles)}\n")

    run(model, ["restart", "submit", "reject", "submit", "approve"])

    print("\nEnabled for editors after submit:")
    state = model.vm.transform(model.vm.initial_vector(), "submit").output
    print(f"  {model.vm.enabled_actions(state, role='editor')}")


if __name__ == "__main__":
    main()
