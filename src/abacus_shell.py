from colorama import Fore, Style, just_fix_windows_console

import abacus

def main():
    just_fix_windows_console()

    while True:
        try:
            text = input("abacus > ")
        except EOFError:
            print()
            break

        text = text.strip()
        if text == "!exit":
            break
        if not text:
            continue

        result, error = abacus.execute('<stdin>', text)

        if error:
            print(Fore.RED + error.as_report() + Style.RESET_ALL)
        elif result:
            print("fetch < " + (result.__repr__()))

if __name__ == "__main__":
    main()
