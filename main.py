from rich.pretty import pprint

from modalist import *


def signature(invoker):
    def args_to_params(args):
        params = invoker.args_to_params(args[:2])
        if len(args) > 2:
            params["footer"] = args[2]
        return params

    return invoker, {"args_to_params": args_to_params}


if __name__ == '__main__':
    signed = modal.mixin({"footer": "sent by modalist"}, signature)
    signed("Deploy finished", "All services are healthy", on_open=modal.click_confirm).then(pprint)
    signed("Deploy finished", "All services are healthy", "build #42").then(pprint)
    pprint(signed.get_current_context())
    modal.close()
    pprint(signed)
