"""File-safe names derived from (answering model, judge model) pairs."""


def safe_model_name(model: str) -> str:
    """Replace characters that are unsafe in file names ('/', ':') with '-'."""
    return model.replace("/", "-").replace(":", "-")


def pair_slug(answering_model: str, judge_model: str) -> str:
    return f"answer_{safe_model_name(answering_model)}-judge_{safe_model_name(judge_model)}"


def report_filename(answering_model: str, judge_model: str) -> str:
    return f"eval-{pair_slug(answering_model, judge_model)}.json"


def evaluation_phase(answering_model: str, judge_model: str) -> str:
    """Checkpoint phase name for one model pair; each pair resumes independently."""
    return f"evaluate-{pair_slug(answering_model, judge_model)}"
