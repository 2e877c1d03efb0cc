# =============================================================================
# PIPELINE RUN LOG
# =============================================================================
# - Collect errors, warnings, and info messages for one pipeline run
# - Echo every message to the console with its severity prefix


from typing import Dict, List


SalesRunLog = Dict[str, List[str]]


def init_report() -> SalesRunLog:

    return {
        'errors': [],
        'warnings': [],
        'info': []
    }


def log_info(message: str, report: SalesRunLog) -> None:
    print(f'[INFO] {message}')
    report['info'].append(message)


def log_warning(message: str, report: SalesRunLog) -> None:
    print(f'[WARNING] {message}')
    report['warnings'].append(message)


def log_error(message: str, report: SalesRunLog) -> None:
    print(f'[ERROR] {message}')
    report['errors'].append(message)


# =============================================================================
# END OF SCRIPT
# =============================================================================
