"""
Returns app: customer return requests and the admin refund workflow.

Usage:
    from returns.services import ReturnService

    return_request = ReturnService.create_return(user, order_id, "Wrong size", items)
    ReturnService.update_status(return_request.id, ReturnStatus.REFUNDED)
"""
