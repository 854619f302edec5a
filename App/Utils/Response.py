def base_response(code, status, message, data=None, error=None):
    """
    Create a standardized API response.

    Args:
        code (int): HTTP status code
        status (str): Status of the response ('success' or 'error')
        message (str): Descriptive message about the response
        data (dict, optional): Response data payload
        error (dict, optional): Error details if any

    Returns:
        tuple: (response dictionary, HTTP status code) ready to be returned from a view
    """
    response = {
        'success': status == 'success',
        'code': code,
        'status': status,
        'message': message,
        'data': data if data is not None else {},
        'error': error if error is not None else {}
    }
    return response, code


def error_response(code, message, error=None):
    return base_response(code=code, status='error', message=message, error=error)
