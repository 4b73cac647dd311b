"""Weekly class timetable generation (class-sections x teachers x day/period slots)."""

from .models import (
	ClassSection,
	PeriodAssignment,
	SectionGrid,
	Subject,
	Teacher,
	Timetable,
	build_subject_teacher_map,
	expand_subject_periods,
)

from .settings import GeneratorSettings, RelaxationPolicy, TimeSlotOptions
from .ledger import TeacherAvailability
from .placement import RelaxationTier, place_subject_period
from .section_scheduler import SectionFailure, SectionOutcome, SectionReport, schedule_section
from .time_slots import TimeSlot, TimeSlotTemplate, build_time_slots
from .validation import collect_warnings, validate_inputs
from .quality import (
	QualityReport,
	compute_quality,
	find_adjacent_repeats,
	find_double_bookings,
	subject_counts,
	teacher_daily_loads,
)
from .formatting import format_section_timetable, format_teacher_timetable
from .generator import GenerationResult, generate_timetable

__all__ = [
	"ClassSection",
	"PeriodAssignment",
	"SectionGrid",
	"Subject",
	"Teacher",
	"Timetable",
	"build_subject_teacher_map",
	"expand_subject_periods",
	"GeneratorSettings",
	"RelaxationPolicy",
	"TimeSlotOptions",
	"TeacherAvailability",
	"RelaxationTier",
	"place_subject_period",
	"SectionFailure",
	"SectionOutcome",
	"SectionReport",
	"schedule_section",
	"TimeSlot",
	"TimeSlotTemplate",
	"build_time_slots",
	"collect_warnings",
	"validate_inputs",
	"QualityReport",
	"compute_quality",
	"find_adjacent_repeats",
	"find_double_bookings",
	"subject_counts",
	"teacher_daily_loads",
	"format_section_timetable",
	"format_teacher_timetable",
	"GenerationResult",
	"generate_timetable",
]
