import logging

__all__ = ('logger', )


def logger():
    return logging.getLogger('grader')
