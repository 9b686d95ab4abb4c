"""Wizard navigation, draft editing and resume attachment."""

import pytest

from portal.errors import JobNotFoundError, ResumePolicyError, SubmissionInProgressError, WizardStateError
from portal.models import ProfileRecord
from portal.wizard import ApplicationWizard, WizardState, open_wizard
from portal.wizard.draft import ACADEMIC_FIELDS, PERSONAL_FIELDS


async def _wizard_at(step, fakes, identity, job, complete_draft, make_pdf):
    wizard = await open_wizard(identity, job.id, fakes)
    wizard.update_draft(**complete_draft)
    wizard.attach_resume(make_pdf())
    while wizard.state < step:
        assert wizard.advance().ok
    return wizard


async def test_open_starts_at_personal_info(fakes, identity, job):
    wizard = await open_wizard(identity, job.id, fakes)

    assert wizard.state is WizardState.PERSONAL_INFO
    assert wizard.current_step == 1
    assert wizard.draft.save_to_profile is True
    assert wizard.draft.resume is None


async def test_open_unknown_job(fakes, identity):
    with pytest.raises(JobNotFoundError, match="no longer be available"):
        await open_wizard(identity, "missing", fakes)


async def test_open_without_profile_gives_empty_draft(fakes, identity, job):
    fakes.profiles.profiles.clear()
    wizard = await open_wizard(identity, job.id, fakes)

    assert all(getattr(wizard.draft, name) == "" for name in PERSONAL_FIELDS + ACADEMIC_FIELDS)
    assert wizard.existing_resume_url is None


async def test_prefill_renders_stored_numbers_as_text(fakes, identity, job):
    fakes.profiles.profiles[identity.user_id] = ProfileRecord(
        user_id=identity.user_id,
        full_name="Asha Rao",
        phone="9876543210",
        class_x_year=2010,
        class_x_percentage=90.0,
        degree_cgpa=8.5,
        primary_resume_url="https://files.test/resumes/old.pdf",
    )
    wizard = await open_wizard(identity, job.id, fakes)

    assert wizard.draft.phone == "9876543210"
    assert wizard.draft.class_x_year == "2010"
    assert wizard.draft.class_x_percentage == "90"
    assert wizard.draft.degree_cgpa == "8.5"
    assert wizard.draft.nationality == ""
    assert wizard.existing_resume_url == "https://files.test/resumes/old.pdf"


async def test_prefill_is_idempotent(fakes, identity, job, complete_draft):
    fakes.profiles.profiles[identity.user_id] = ProfileRecord(
        user_id=identity.user_id, full_name="Asha Rao", phone="9876543210", degree_year=2016
    )
    first = await open_wizard(identity, job.id, fakes)
    second = await open_wizard(identity, job.id, fakes)

    assert first.draft.model_dump() == second.draft.model_dump()


async def test_duplicate_application_opens_submitted(fakes, identity, job):
    fakes.catalog.applied.add((identity.user_id, job.id))
    wizard = await open_wizard(identity, job.id, fakes)

    assert wizard.state is WizardState.SUBMITTED
    assert wizard.is_submitted
    assert wizard.current_step is None
    with pytest.raises(WizardStateError):
        wizard.advance()


@pytest.mark.parametrize("step", [WizardState.PERSONAL_INFO, WizardState.PROFESSIONAL])
async def test_advance_blocked_by_empty_required_field(step, fakes, identity, job, complete_draft, make_pdf):
    wizard = await _wizard_at(step, fakes, identity, job, complete_draft, make_pdf)
    owned = PERSONAL_FIELDS if step is WizardState.PERSONAL_INFO else ACADEMIC_FIELDS
    wizard.update_draft(**{owned[-1]: ""})
    before = wizard.draft.model_dump()

    outcome = wizard.advance()

    assert not outcome.ok
    assert wizard.state is step
    assert list(outcome.errors) == [owned[-1]]
    assert wizard.draft.model_dump() == before


async def test_missing_degree_cgpa_errors_on_that_field_only(fakes, identity, job, complete_draft, make_pdf):
    wizard = await _wizard_at(WizardState.PROFESSIONAL, fakes, identity, job, complete_draft, make_pdf)
    wizard.update_draft(degree_cgpa="")

    outcome = wizard.advance()

    assert not outcome.ok
    assert outcome.errors == {"degree_cgpa": "Degree CGPA is required"}
    assert wizard.current_step == 2


async def test_resume_gate(fakes, identity, job, complete_draft, make_pdf):
    wizard = await _wizard_at(WizardState.DOCUMENTS, fakes, identity, job, complete_draft, make_pdf)
    wizard.detach_resume()

    outcome = wizard.advance()
    assert not outcome.ok
    assert outcome.notice == "Resume Required"
    assert outcome.description == "Please upload your resume to continue."
    assert wizard.state is WizardState.DOCUMENTS

    wizard.attach_resume(make_pdf())
    assert wizard.advance().ok
    assert wizard.state is WizardState.REVIEW


async def test_resume_gate_accepts_existing_profile_resume(fakes, identity, job, complete_draft):
    fakes.profiles.profiles[identity.user_id] = ProfileRecord(
        user_id=identity.user_id,
        primary_resume_url="https://files.test/resumes/old.pdf",
    )
    wizard = await open_wizard(identity, job.id, fakes)
    wizard.update_draft(**complete_draft)
    wizard.advance()
    wizard.advance()

    assert wizard.advance().ok
    assert wizard.state is WizardState.REVIEW


async def test_advance_at_review_does_not_submit(fakes, identity, job, complete_draft, make_pdf):
    wizard = await _wizard_at(WizardState.REVIEW, fakes, identity, job, complete_draft, make_pdf)

    outcome = wizard.advance()

    assert not outcome.ok
    assert wizard.state is WizardState.REVIEW
    assert fakes.applications.snapshots == []


@pytest.mark.parametrize("start", [2, 3, 4])
async def test_retreat_always_decrements(start, fakes, identity, job, complete_draft, make_pdf):
    wizard = await _wizard_at(WizardState(start), fakes, identity, job, complete_draft, make_pdf)
    # Invalidate everything; going back needs no validation
    wizard.update_draft(**{name: "" for name in complete_draft})
    wizard.detach_resume()

    outcome = wizard.retreat()

    assert outcome.ok
    assert wizard.current_step == start - 1


async def test_retreat_from_first_step_is_a_no_op(fakes, identity, job):
    wizard = await open_wizard(identity, job.id, fakes)

    assert not wizard.retreat().ok
    assert wizard.current_step == 1


async def test_jump_back_allowed(fakes, identity, job, complete_draft, make_pdf):
    wizard = await _wizard_at(WizardState.REVIEW, fakes, identity, job, complete_draft, make_pdf)

    assert wizard.jump_to(2).ok
    assert wizard.state is WizardState.PROFESSIONAL


@pytest.mark.parametrize("target", [3, 4, 5, 0])
async def test_jump_forward_or_out_of_range_rejected(target, fakes, identity, job, complete_draft, make_pdf):
    wizard = await _wizard_at(WizardState.PROFESSIONAL, fakes, identity, job, complete_draft, make_pdf)

    outcome = wizard.jump_to(target)

    assert not outcome.ok
    assert wizard.current_step == 2


async def test_jump_does_not_return_to_previously_visited_step(fakes, identity, job, complete_draft, make_pdf):
    wizard = await _wizard_at(WizardState.DOCUMENTS, fakes, identity, job, complete_draft, make_pdf)
    wizard.jump_to(1)

    assert not wizard.jump_to(3).ok
    assert wizard.current_step == 1


async def test_oversized_resume_rejected_without_upload(fakes, identity, job, complete_draft, make_pdf):
    wizard = await _wizard_at(WizardState.DOCUMENTS, fakes, identity, job, complete_draft, make_pdf)
    wizard.detach_resume()

    with pytest.raises(ResumePolicyError) as exc:
        wizard.attach_resume(make_pdf(size=6 * 1024 * 1024))

    assert exc.value.title == "File too large"
    assert exc.value.message == "Please upload a file smaller than 5MB."
    assert wizard.draft.resume is None
    assert fakes.documents.upload_calls == []


async def test_non_pdf_keeps_previous_attachment(fakes, identity, job, make_pdf):
    wizard = await open_wizard(identity, job.id, fakes)
    original = make_pdf(filename="cv.pdf")
    wizard.attach_resume(original)

    with pytest.raises(ResumePolicyError, match="Please upload a PDF file."):
        wizard.attach_resume(make_pdf(filename="cv.docx", content_type="application/msword"))

    assert wizard.draft.resume is original


async def test_unknown_draft_field_rejected(fakes, identity, job):
    wizard = await open_wizard(identity, job.id, fakes)

    with pytest.raises(WizardStateError, match="salary"):
        wizard.update_draft(salary="1")


async def test_closed_wizard_rejects_edits(fakes, identity, job):
    wizard = await open_wizard(identity, job.id, fakes)
    wizard.close()

    assert wizard.is_closed
    with pytest.raises(WizardStateError):
        wizard.update_draft(phone="9876543210")


async def test_edits_blocked_while_submitting(fakes, identity, job):
    wizard = ApplicationWizard(identity, job, fakes)
    wizard._submitting = True

    with pytest.raises(SubmissionInProgressError):
        wizard.retreat()


async def test_summary_lists_sections(fakes, identity, job, complete_draft, make_pdf):
    wizard = await _wizard_at(WizardState.REVIEW, fakes, identity, job, complete_draft, make_pdf)

    summary = wizard.summary()

    assert summary["job"]["title"] == "Chief Financial Officer"
    assert summary["full_name"] == "Asha Rao"
    assert summary["personal"]["phone"] == "9876543210"
    assert summary["academic"]["degree_cgpa"] == "8.5"
    assert summary["resume"]["filename"] == "resume.pdf"
    assert summary["save_to_profile"] is True


async def test_null_save_to_profile_leaves_flag_unchanged(fakes, identity, job):
    wizard = await open_wizard(identity, job.id, fakes)

    wizard.update_draft(save_to_profile=None, phone="9876543210")
    assert wizard.draft.save_to_profile is True

    wizard.set_save_to_profile(False)
    wizard.update_draft(save_to_profile=None)
    assert wizard.draft.save_to_profile is False
