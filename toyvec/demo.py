from toyvec.utils.dynamicarray import DynamicArray, BorrowError


def main():
    """ Push birds, read one through a cursor, then push again once the
    cursor is released. """
    birds = DynamicArray.new()
    birds.push('Java Finch')
    birds.push('Budgerigar')
    print(f'Birds: {birds} (len={len(birds)}, capacity={birds.capacity()})')

    cursor = birds.iter()

    # Rejected: the cursor still borrows the array
    try:
        birds.push('Hill Myna')
    except BorrowError as e:
        print(f'Push rejected: {e}')

    first = next(cursor)
    if first != 'Java Finch':
        raise RuntimeError(f"Expected 'Java Finch' first, got {first!r}.")
    print(f'First bird: {first}')

    cursor.release()
    birds.push('Canary')
    print(f'Birds: {birds} (len={len(birds)}, capacity={birds.capacity()})')
    return birds


if __name__ == '__main__':
    main()
