from types import SimpleNamespace

from app.core.scoring.name_resolver import CandidateNameResolver, looks_auto_generated
from app.models import Candidate, Student


def add(db, record):
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


def test_falls_back_to_email_local_part_when_no_record(db):
    resolver = CandidateNameResolver(db)
    assert resolver.resolve(email="jane.doe@x.com") == "jane.doe"


def test_full_name_from_name_parts(db):
    student = add(db, Student(email="s@x.com", salutation="Dr.", first_name=" Ada ", middle_name="", last_name="Lovelace"))
    assert CandidateNameResolver(db).resolve(student_id=student.id, email="s@x.com") == "Dr. Ada Lovelace"


def test_name_field_when_parts_are_blank(db):
    candidate = add(db, Candidate(email="c@x.com", name="Grace Hopper"))
    assert CandidateNameResolver(db).resolve(candidate_id=candidate.id) == "Grace Hopper"


def test_local_part_when_record_has_no_name(db):
    add(db, Candidate(email="nobody@x.com"))
    assert CandidateNameResolver(db).resolve(email="nobody@x.com") == "nobody"


def test_student_id_wins_over_candidate_id(db):
    student = add(db, Student(email="a@x.com", first_name="Student"))
    candidate = add(db, Candidate(email="a@x.com", first_name="Candidate"))
    name = CandidateNameResolver(db).resolve(student_id=student.id, candidate_id=candidate.id, email="a@x.com")
    assert name == "Student"


def test_candidate_id_wins_over_email_lookups(db):
    add(db, Student(email="b@x.com", first_name="ByEmail"))
    candidate = add(db, Candidate(email="other@x.com", first_name="ById"))
    assert CandidateNameResolver(db).resolve(candidate_id=candidate.id, email="b@x.com") == "ById"


def test_student_email_wins_over_candidate_email(db):
    add(db, Candidate(email="both@x.com", first_name="Cand"))
    add(db, Student(email="both@x.com", first_name="Stud"))
    assert CandidateNameResolver(db).resolve(email="both@x.com") == "Stud"


def test_missing_ids_fall_through_to_email(db):
    add(db, Candidate(email="late@x.com", first_name="Late", last_name="Match"))
    assert CandidateNameResolver(db).resolve(student_id=999, candidate_id=998, email="late@x.com") == "Late Match"


def test_looks_auto_generated():
    assert looks_auto_generated("", "a@x.com")
    assert looks_auto_generated(None, "a@x.com")
    assert looks_auto_generated("a@x.com", "a@x.com")
    assert looks_auto_generated("a", "a@x.com")
    assert not looks_auto_generated("Ann Smith", "a@x.com")
    assert not looks_auto_generated("Annie", "a@x.com")


def test_repair_only_touches_auto_generated_names(db):
    add(db, Student(email="jo@x.com", first_name="Jo", last_name="March"))
    resolver = CandidateNameResolver(db)

    stale = SimpleNamespace(candidate_name="jo", candidate_email="jo@x.com", student_id=None, candidate_id=None)
    kept = SimpleNamespace(candidate_name="Josephine", candidate_email="jo@x.com", student_id=None, candidate_id=None)

    assert resolver.repair(stale) == "Jo March"
    assert resolver.repair(kept) == "Josephine"
